"""
API package containing the HTTP routes.

``router`` aggregates the domain routers from ``endpoints`` and is
mounted by ``main.create_app`` under the ``/api`` prefix.
"""
