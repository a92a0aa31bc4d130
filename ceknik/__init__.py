"""
ceknik - NIK decoder and voter-roll lookup client
"""

__version__ = "1.0.0"
