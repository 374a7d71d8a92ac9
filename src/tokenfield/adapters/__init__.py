"""Host adapters wiring the engine into UI toolkits."""
