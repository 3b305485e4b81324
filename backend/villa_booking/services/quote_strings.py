"""Localised labels for the quote PDF."""

from datetime import date

QUOTE_STRINGS: dict[str, dict[str, str]] = {
    "en": {
        "reservation_intro": "We confirm the reservation of the villa",
        "from": "from",
        "to": "to",
        "check_in": "check-in",
        "check_out": "check-out",
        "total_nights": "for a total of",
        "nights": "nights",
        "guests": "Number of guests:",
        "persons": "persons",
        "main_guest": "Main guest:",
        "price_breakdown": "Price breakdown",
        "nights_at": "nights at",
        "per_night": "per night",
        "discount": "discount",
        "accommodation": "Accommodation",
        "cleaning": "Cleaning fee",
        "total": "Total amount",
        "deposit_line": "A refundable security deposit of {deposit} is due on arrival.",
        "partial_payment_line": "Partial payment received: {amount}",
        "payment_date": "payment date",
        "remaining_line": "Remaining balance: {amount}.",
        "balance_due": "Due by",
        "not_provided": "not provided",
    },
    "es": {
        "reservation_intro": "Confirmamos la reserva de la villa",
        "from": "desde el",
        "to": "hasta el",
        "check_in": "entrada",
        "check_out": "salida",
        "total_nights": "con un total de",
        "nights": "noches",
        "guests": "Número de huéspedes:",
        "persons": "personas",
        "main_guest": "Huésped principal:",
        "price_breakdown": "Desglose del precio",
        "nights_at": "noches a",
        "per_night": "por noche",
        "discount": "de descuento",
        "accommodation": "Alojamiento",
        "cleaning": "Limpieza",
        "total": "Importe total",
        "deposit_line": "Se abonará a la llegada una fianza reembolsable de {deposit}.",
        "partial_payment_line": "Pago parcial recibido: {amount}",
        "payment_date": "fecha de pago",
        "remaining_line": "Saldo pendiente: {amount}.",
        "balance_due": "Fecha límite",
        "not_provided": "no indicado",
    },
    "ru": {
        "reservation_intro": "Подтверждаем бронирование виллы",
        "from": "с",
        "to": "по",
        "check_in": "заезд",
        "check_out": "выезд",
        "total_nights": "всего",
        "nights": "ночей",
        "guests": "Количество гостей:",
        "persons": "чел.",
        "main_guest": "Основной гость:",
        "price_breakdown": "Расчёт стоимости",
        "nights_at": "ночей по",
        "per_night": "за ночь",
        "discount": "скидка",
        "accommodation": "Проживание",
        "cleaning": "Уборка",
        "total": "Итого",
        "deposit_line": "Возвратный залог {deposit} вносится при заезде.",
        "partial_payment_line": "Получена предоплата: {amount}",
        "payment_date": "дата оплаты",
        "remaining_line": "Остаток к оплате: {amount}.",
        "balance_due": "Срок оплаты",
        "not_provided": "не указано",
    },
}

_MONTHS: dict[str, tuple[str, ...]] = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "es": (
        "enero", "febrero", "marzo", "abril", "mayo", "junio",
        "julio", "agosto", "septiembre", "octubre", "noviembre", "diciembre",
    ),
    "ru": (
        "января", "февраля", "марта", "апреля", "мая", "июня",
        "июля", "августа", "сентября", "октября", "ноября", "декабря",
    ),
}


def format_long_date(value: date, lang: str) -> str:
    """Long-form date in the given language, e.g. ``3 de julio de 2026``."""
    month = _MONTHS.get(lang, _MONTHS["en"])[value.month - 1]
    if lang == "es":
        return f"{value.day} de {month} de {value.year}"
    if lang == "ru":
        return f"{value.day} {month} {value.year} г."
    return f"{month} {value.day}, {value.year}"
