"""
Offline scripts for OpenSearch maintenance.

This package contains scripts for:
- Creating the pessoa data and sequence indices
"""
