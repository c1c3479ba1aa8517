"""Entity-component-system core: entities, component storage, worlds and systems."""