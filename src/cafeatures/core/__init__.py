"""Core capability model: flags, native bridges, filesystem defaults.

Submodules:
    flags    -- Feature bits, token table, normalization, time granularity
    native   -- Linux inode flag and FAT attribute bridges
    fstypes  -- Default feature set per filesystem magic
    records  -- Record type tag names
"""
