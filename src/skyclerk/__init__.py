"""
Skyclerk API client.

A typed Python client for the Skyclerk bookkeeping REST API: bearer-token
session handling, workspace-scoped resource services, multipart receipt
uploads and the periodic subscription health-ping.
"""

__version__ = "0.1.0"
