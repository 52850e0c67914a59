"""
Users Dashboard

Fetches users from a JSON API, lets the viewer search and sort them, and
shows the posts of the selected user.
"""

__version__ = "0.1.0"
