"""
Course copy web service functions for the LS2 integration.
"""
