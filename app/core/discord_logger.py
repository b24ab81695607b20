import logging
import time
import requests
from .settings import settings

# Diccionario para evitar enviar el mismo tipo de alerta muy seguido
_last_alert_time = {}
FLOOD_INTERVAL = 20  # segundos entre alertas iguales


def send_discord_alert(message: str, level: str = "INFO") -> bool:
    """
    Envía una alerta ligera a Discord con control de flood.
    Devuelve True solo si la alerta salió hacia el webhook.
    """
    if not settings.DISCORD_WEBHOOK_URL:
        return False

    now = time.time()
    last_time = _last_alert_time.get(level, 0)

    if now - last_time < FLOOD_INTERVAL:
        return False

    _last_alert_time[level] = now

    emoji = {
        "INFO": "ℹ️",
        "WARN": "⚠️",
        "ERROR": "🔥",
        "CRITICAL": "💀"
    }.get(level, "⚡")

    payload = {"content": f"{emoji} **[{level}] Fleet API:** {message}"}

    try:
        requests.post(settings.DISCORD_WEBHOOK_URL, json=payload, timeout=2)
        return True
    except requests.RequestException as e:
        # No se usa el logger "fleet" aqui para no crear un ciclo de alertas
        logging.getLogger(__name__).warning(f"No se pudo enviar alerta a Discord: {e}")
        return False
