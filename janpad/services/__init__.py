"""Serviços do Janpad."""
