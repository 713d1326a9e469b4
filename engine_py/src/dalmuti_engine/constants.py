"""Game constants and utilities"""

# Phases
PHASE_LOBBY = 'lobby'
PHASE_TAX = 'tax'
PHASE_PLAY = 'play'
PHASE_ROUND_OVER = 'round_over'

# Rank domain. 1 is the best card, 12 the worst, 0 is the wild card.
WILD_RANK = 0
MIN_RANK = 1
MAX_RANK = 12
WILD_ALONE_RANK = 13  # effective rank of wild cards played on their own

WILD_COUNT = 2
DECK_SIZE = WILD_COUNT + sum(range(MIN_RANK, MAX_RANK + 1))  # 80

# Placeholder cards shown in place of another player's hand
HIDDEN_CARD_RANK = 1
HIDDEN_CARD_PREFIX = 'hidden'

# Taxation
PRIMARY_TAX_COUNT = 2
SECONDARY_TAX_COUNT = 1
PRIMARY_TAX_MIN_PLAYERS = 2
SECONDARY_TAX_MIN_PLAYERS = 4

# Error codes
ERROR_EMPTY_SELECTION = 'EMPTY_SELECTION'
ERROR_UNKNOWN_CARD = 'UNKNOWN_CARD'
ERROR_DUPLICATE_CARD = 'DUPLICATE_CARD'
ERROR_WRONG_CARD_COUNT = 'WRONG_CARD_COUNT'
ERROR_UNKNOWN_PLAYER = 'UNKNOWN_PLAYER'
ERROR_INVALID_ACTION = 'INVALID_ACTION'
ERROR_WRONG_PHASE = 'WRONG_PHASE'
ERROR_NOT_YOUR_TURN = 'NOT_YOUR_TURN'
ERROR_NOT_OWNER = 'NOT_OWNER'
ERROR_PATTERN_MISMATCH = 'PATTERN_MISMATCH'
ERROR_RANK_TOO_LOW = 'RANK_TOO_LOW'
ERROR_MUST_LEAD = 'MUST_LEAD'
ERROR_NO_PENDING_DEBT = 'NO_PENDING_DEBT'
ERROR_INSUFFICIENT_WILDS = 'INSUFFICIENT_WILDS'
ERROR_REVOLUTION_ALREADY_DECLARED = 'REVOLUTION_ALREADY_DECLARED'

CATEGORY_MALFORMED = 'malformed'
CATEGORY_AUTHORIZATION = 'authorization'
CATEGORY_RULE = 'rule'

ERROR_CATEGORIES = {
    ERROR_EMPTY_SELECTION: CATEGORY_MALFORMED,
    ERROR_UNKNOWN_CARD: CATEGORY_MALFORMED,
    ERROR_DUPLICATE_CARD: CATEGORY_MALFORMED,
    ERROR_WRONG_CARD_COUNT: CATEGORY_MALFORMED,
    ERROR_UNKNOWN_PLAYER: CATEGORY_MALFORMED,
    ERROR_INVALID_ACTION: CATEGORY_MALFORMED,
    ERROR_WRONG_PHASE: CATEGORY_AUTHORIZATION,
    ERROR_NOT_YOUR_TURN: CATEGORY_AUTHORIZATION,
    ERROR_NOT_OWNER: CATEGORY_AUTHORIZATION,
    ERROR_PATTERN_MISMATCH: CATEGORY_RULE,
    ERROR_RANK_TOO_LOW: CATEGORY_RULE,
    ERROR_MUST_LEAD: CATEGORY_RULE,
    ERROR_NO_PENDING_DEBT: CATEGORY_RULE,
    ERROR_INSUFFICIENT_WILDS: CATEGORY_RULE,
    ERROR_REVOLUTION_ALREADY_DECLARED: CATEGORY_RULE,
}
