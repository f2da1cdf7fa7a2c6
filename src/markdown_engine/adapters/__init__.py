"""Host adapters that connect the engine to UI toolkits."""
