"""
distrocmd — command resolution engine for multi-distro app installs.
"""

__version__ = "0.1.0"
