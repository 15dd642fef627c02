"""
Todo Master client: HTTP gateway, state container and terminal views.
"""
