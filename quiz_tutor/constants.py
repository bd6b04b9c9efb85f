import pathlib

API_PREFIX = "/api/quiz"

# Quiz session defaults (seconds / number of questions)
DEFAULT_TIME_PER_QUESTION = 30
DEFAULT_QUESTION_COUNT = 5

TIME_OPTIONS = (5, 10, 15, 20, 25, 30)
QUESTION_COUNT_OPTIONS = (5, 10, 15, 20, 25, 30)

# Seeded difficulty levels: (id, title, order_index)
DEFAULT_LEVELS = (
    ("junior", "Junior", 1),
    ("middle", "Middle", 2),
    ("senior", "Senior", 3),
)

# Filter value meaning "no filter" in the admin listing
FILTER_ALL = "all"

DEFAULT_LOCALE = "ru"

DEFAULT_SERVER_HOST = "0.0.0.0"
DEFAULT_SERVER_PORT = 5000

DEFAULT_CORS_WHITELIST = ("http://localhost:5173", "http://localhost:4173")

ROOT_DIR = pathlib.Path(__file__).parent.parent
DEFAULT_DATA_PATH = ROOT_DIR / "data"
TEMPLATES_PATH = ROOT_DIR / "templates"
DEFAULT_STATIC_PATH = ROOT_DIR / "dist"
LOCALES_PATH = pathlib.Path(__file__).parent / "i18n" / "locales"
DEFAULT_DB_PATH = DEFAULT_DATA_PATH / "quiz.sqlite3"
