"""Settings, logging and the error taxonomy shared by every stage."""
