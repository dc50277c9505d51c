"""L0 Data — constants shared by every engine layer."""
