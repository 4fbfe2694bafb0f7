"""Fixed game parameters."""

MIN_PLAYERS = 2
MAX_PLAYERS = 30
PIECES_PER_PLAYER = 4

DICE_FACES = 6
ENTRY_ROLL = 6  # a piece at home only enters the track on this roll

HOME_POSITION = 0
TRACK_START = 1
