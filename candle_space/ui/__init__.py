"""User interface layer: state store, coordinators and the PyQt6 desktop client."""
