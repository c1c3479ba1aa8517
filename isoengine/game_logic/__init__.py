"""Game components, render snapshots of entities, and the game world."""