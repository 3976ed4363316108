"""Ambari Shell - interactive cluster provisioning front-end.

Lets an operator focus an Ambari blueprint, assign hosts to its host
groups and create (or tear down) a cluster from an interactive prompt.
"""

try:
    from importlib.metadata import version

    __version__ = version("ambari-shell")
except Exception:
    __version__ = "0.0.0.dev0"

__all__ = ["__version__"]
