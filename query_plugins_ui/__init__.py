"""Web front-end for discovering and running query runner plugins."""
