"""
vpkpack: build installable VPK packages from a param.sfo, an eboot.bin and extra files.
"""

__version__ = "0.2.0"
