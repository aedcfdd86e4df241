from datetime import timedelta

REVIEW_INTERVAL = timedelta(days=1)  # doubled per correct answer in a row

# Selection weights
BASE_WEIGHT = 1
OVERDUE_BONUS = 10     # next_review <= now
FAILED_BONUS = 5       # streak broken by a wrong answer
NEW_ITEM_BONUS = 2     # never answered
NOISE_RANGE = 5        # uniform noise in [0, NOISE_RANGE)

QUESTIONS_PER_QUIZ = 10
OPTIONS_PER_QUESTION = 4

REVIEW_PRIORITY_LIMIT = 5
RECENT_RESULTS_LIMIT = 10
