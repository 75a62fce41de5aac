"""CineLingua - navigateur de métadonnées films, séries et personnalités."""
