"""HTTP admin API for repover."""
