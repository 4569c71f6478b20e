"""
Restaurant Finder

Client-side restaurant discovery: fetches the restaurants delivering to a
UK postcode from a remote directory, then filters and sorts them according
to user-selected criteria.
"""

__version__ = "0.1.0"
__author__ = "Restaurant Finder Team"
