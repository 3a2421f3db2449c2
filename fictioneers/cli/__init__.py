"""
Command-line interface for the Fictioneers SDK.
"""
