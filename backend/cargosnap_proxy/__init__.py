"""
CargoSnap Proxy — Application Package Initializer
===================================================

What: Backend proxy in front of the CargoSnap file-management API.

Architecture Note:

    ┌─────────────────────────────────────┐
    │          Routes (API Layer)         │  ← validate input, map status codes
    ├─────────────────────────────────────┤
    │   Services (Upstream + Uploads)     │  ← one outbound call per request
    ├─────────────────────────────────────┤
    │       Schemas & Configuration       │  ← Pydantic models, Settings
    └─────────────────────────────────────┘

    Nothing is persisted: every request is built from the inbound call,
    consumed by one upstream call and discarded.
"""

__version__ = "1.0.0"
