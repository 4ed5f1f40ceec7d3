"""Catalogue module — jutsu lookup by confirmed seal sequence."""

from handseal.catalogue.jutsu import Jutsu, JutsuCatalogue

__all__ = ["Jutsu", "JutsuCatalogue"]
