"""Domain services built on top of the provider interfaces."""
