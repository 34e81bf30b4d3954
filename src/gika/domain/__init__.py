"""
Summary: Pure transformations applied to Tika server responses.
Why: Keep text and metadata handling testable without any HTTP traffic.
"""
