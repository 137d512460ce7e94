"""Fehler des Datenspeichers."""


class StoreError(Exception):
    """Ein Aufruf an den Datenspeicher ist fehlgeschlagen."""


class NotFoundError(StoreError):
    """Gruppe, Kurs oder Stundenblock existiert nicht."""
