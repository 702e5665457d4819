"""Qt desktop front end for the HUD core. Desktop-only package."""
