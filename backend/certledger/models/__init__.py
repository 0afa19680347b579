"""ORM Models: persistence shape of the world state."""
