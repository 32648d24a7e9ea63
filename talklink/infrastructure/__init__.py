"""Infrastructure: remote gateway, credential storage, encryption."""
