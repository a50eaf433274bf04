"""
Package-format constants that are not meant to change at runtime.
"""

# Archive paths mandated by the package installer
DEFAULT_SFO_VPK_PATH = "sce_sys/param.sfo"
DEFAULT_EBOOT_VPK_PATH = "eboot.bin"

DEFAULT_OUTPUT_FILE = "output.vpk"

# Unix permission bits stamped on every entry
ENTRY_PERMISSIONS = 0o755

# Earliest timestamp a zip header can hold
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)
