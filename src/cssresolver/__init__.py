"""
css-url-resolver: build-time asset resolver for stylesheets

Finds every url(...) reference in a CSS document, resolves it to a file on
disk through aliases and include paths, copies the file into a typed output
folder under a content-hashed name, and rewrites the reference to match.
"""

__version__ = "1.0"
__author__ = "css-url-resolver project"
__description__ = "Build-time CSS asset resolver"
