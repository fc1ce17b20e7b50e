"""Configuration, logging, errors and the storage collaborator."""
