"""
Summary: Endpoint configuration for the Tika client.
Why: Keep environment and file reads at the process boundary.
"""
