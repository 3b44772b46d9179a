"""Domain types: accounts, intents, enums and constants."""
