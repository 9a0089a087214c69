"""ptools - Text Transform Pipeline.

Paste text into one shared buffer and watch a catalog of transforms
render their output live:
- Encoding (base64, URI, JSON string escaping)
- Structural reformatting (JSON, JSON5, YAML, Python literals)
- Compression (gzip) and request conversion (curl)

Any successful output can be promoted back into the buffer to chain
transforms together.
"""

__version__ = "0.1.0"
