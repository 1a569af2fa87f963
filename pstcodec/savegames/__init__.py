from .pirates import PiratesSavegame
