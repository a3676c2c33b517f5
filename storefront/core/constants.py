"""Storefront-wide constants.

Centralizes texts and limits shared by views, stores and the bot adapter.
"""

# ============== MONEY ==============
CURRENCY = "синапсов"
PRICE_UNAVAILABLE = "Бесценно"

# ============== BUTTON TEXTS ==============
BUTTON_TEXT_UNAVAILABLE = "Недоступно"
BUTTON_TEXT_BUY = "Купить"
BUTTON_TEXT_REMOVE = "Удалить из корзины"
BUTTON_TEXT_CHECKOUT = "Оформить"
BUTTON_TEXT_NEXT = "Далее"
BUTTON_TEXT_PAY = "Оплатить"
BUTTON_TEXT_CLOSE = "✖️ Закрыть"
BUTTON_TEXT_SUCCESS = "За новыми покупками!"
BUTTON_TEXT_PAYMENT_ONLINE = "Онлайн"
BUTTON_TEXT_PAYMENT_CASH = "При получении"

# ============== CATEGORIES ==============
# Category tag -> marker shown next to the category name
CATEGORY_MARKERS = {
    "софт-скил": "🟢",
    "хард-скил": "🟠",
    "кнопка": "🔵",
    "дополнительное": "🟣",
    "другое": "🟡",
}
CATEGORY_MARKER_UNKNOWN = "⚪"

# ============== API ==============
API_PATH = "/api/weblarek"
CDN_PATH = "/content/weblarek"
API_TIMEOUT_SECONDS = 30

# ============== BROKER ==============
BROKER_MAX_DEPTH = 32

# ============== SESSIONS ==============
# Least recently used chats are dropped beyond this many live sessions
MAX_SESSIONS = 10_000

# ============== MESSAGE LIMITS ==============
MAX_BUTTON_TITLE_LENGTH = 32
