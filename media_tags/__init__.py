"""
Markup and URL helpers for a hosted media transformation service.

Builds <img>, <video>, <input> and <form> tags, delivery URLs, signed upload
parameters and responsive-image srcset/sizes attributes.
"""

__version__ = "0.1.0"
