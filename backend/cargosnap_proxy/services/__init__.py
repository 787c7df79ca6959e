# Services package init
"""
CargoSnap Proxy — Services Layer
==================================

What:  Everything a route needs besides HTTP plumbing.

Service Inventory:
    - CargoSnapClient: sends one authenticated request upstream, maps failures
      to UpstreamError
    - UploadService: validates attachment batches and builds multipart parts
"""
