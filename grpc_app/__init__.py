"""gRPC transport layer for the route guide.

This package hosts:
- Protocol buffers (in `protos/`) and the Python modules compiled from them (in `generated/`).
- Server bootstrap and interceptors.
- Thin service adapters that map gRPC requests to application services.
"""
