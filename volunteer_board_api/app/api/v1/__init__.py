"""
Version 1 of the API.

This subpackage bundles the opportunity and signup endpoints for the
first public version of the Volunteer Board API.
"""
