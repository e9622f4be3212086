"""
vrfcodec - VRF token codec for 9anime-style catalogue sites

Encodes identifiers and search queries into the opaque ``vrf`` tokens the
site expects on its AJAX endpoints, and decodes the tokens it returns back
into stream URLs.
"""

__version__ = "0.3.0"
__author__ = "jbruns"
