"""Social notifications API package.

Keeps the local ``app`` package ahead of any similarly named distribution
installed in the environment; subpackages are implicit namespaces.
"""
