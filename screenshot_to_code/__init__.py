"""Screenshot-to-code service.

Describes a website screenshot with a vision model, turns the description into
a React/Tailwind component with a code-generation model, and streams the code
back over HTTP.
"""

__version__ = "0.1.0"
