"""Domain types: error kinds, results, modes and the filesystem protocol."""
