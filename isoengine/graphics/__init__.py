"""Textures, the texture atlas and registry, tile textures and software rendering."""