"""Django app configuration for neighborhood_board."""
from django.apps import AppConfig


class NeighborhoodBoardConfig(AppConfig):
    """Configuration for the neighborhood board app."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "neighborhood_board"
    verbose_name = "Neighborhood Board"
