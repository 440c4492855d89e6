"""Application layer - services, commands, interfaces, and DTOs."""
