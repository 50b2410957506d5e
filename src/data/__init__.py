"""
Data module: comparison session state and candidate loading.
"""
