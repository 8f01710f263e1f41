"""Test doubles for the CDP endpoint, sessions and the canvas runtime.

Focused modules:
- fake_cdp.py: in-memory debugger websocket with scripted replies
- fake_session.py: session stand-in for manager tests
- session_factory.py: counting session factory
- stub_canvas.py: interpreter for compiled markup scripts
- settings.py: settings builders with zero delays
"""
