"""Terrain generation: noise height maps, tiles and chunks."""