"""Packaged resources for tsbootstrap."""
