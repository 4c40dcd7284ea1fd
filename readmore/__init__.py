"""
readmore - find published content carrying a read-more block and pick items to link to
"""

__version__ = "0.1.0"
