"""
Diagram Graph Backend - HTTP API, WebSocket feed and CLI around diagram_core.
"""
