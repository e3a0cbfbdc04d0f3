"""Path and output file helpers shared by the core and the controller."""
