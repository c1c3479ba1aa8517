"""Vertex and instance data, instance meshes, and chunk, entity and world meshes."""