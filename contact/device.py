"""
Device Fingerprinting

Best-effort classification of the submitting device from client-supplied
signals (user agent, platform, pixel ratio, screen size, GPU renderer).

Every signal is spoofable. The label is attached to the outgoing payload as
advisory metadata only and must never be used for access control.
"""
import logging
import re
from dataclasses import dataclass
from typing import Callable, Optional, Union

logger = logging.getLogger(__name__)

UNKNOWN_DEVICE = 'Unknown device'
GENERIC_IPHONE = 'iPhone (iOS)'
GENERIC_IPAD = 'iPad (iPadOS)'
GENERIC_MAC = 'Mac (macOS)'
GENERIC_ANDROID = 'Android phone'
WINDOWS_PC = 'Windows PC'
LINUX_PC = 'Linux PC'

# Physical resolution (short side, long side) -> model
IPHONE_MODELS = {
    (640, 1136): 'iPhone 5 / 5s / SE',
    (750, 1334): 'iPhone 6 / 7 / 8 / SE (2nd-3rd gen)',
    (1242, 2208): 'iPhone 6 Plus / 7 Plus / 8 Plus',
    (1125, 2436): 'iPhone X / XS / 11 Pro',
    (828, 1792): 'iPhone XR / 11',
    (1242, 2688): 'iPhone XS Max / 11 Pro Max',
    (1080, 2340): 'iPhone 12 mini / 13 mini',
    (1170, 2532): 'iPhone 12 / 13 / 14',
    (1284, 2778): 'iPhone 12 Pro Max / 13 Pro Max / 14 Plus',
    (1179, 2556): 'iPhone 14 Pro / 15 / 15 Pro / 16',
    (1290, 2796): 'iPhone 14 Pro Max / 15 Plus / 15 Pro Max / 16 Plus',
    (1206, 2622): 'iPhone 16 Pro',
    (1320, 2868): 'iPhone 16 Pro Max',
}

MAC_MODELS = {
    (1600, 2560): 'MacBook Air / Pro 13"',
    (1664, 2560): 'MacBook Air 13"',
    (1864, 2880): 'MacBook Air 15"',
    (1800, 2880): 'MacBook Pro 15"',
    (1964, 3024): 'MacBook Pro 14"',
    (2234, 3456): 'MacBook Pro 16"',
    (2520, 4480): 'iMac 24"',
    (2880, 5120): 'iMac 27" / Studio Display',
}

# UA token -> brand, checked in order
ANDROID_MANUFACTURERS = (
    (re.compile(r'samsung|\bSM-[A-Z0-9]+', re.I), 'Samsung'),
    (re.compile(r'xiaomi|redmi|\bpoco|\bMi \w', re.I), 'Xiaomi'),
    (re.compile(r'\bpixel\b', re.I), 'Google'),
    (re.compile(r'huawei', re.I), 'Huawei'),
    (re.compile(r'\bhonor\b', re.I), 'Honor'),
    (re.compile(r'oneplus', re.I), 'OnePlus'),
    (re.compile(r'\boppo\b|\bCPH\d{4}', re.I), 'OPPO'),
    (re.compile(r'\bvivo\b', re.I), 'vivo'),
    (re.compile(r'realme|\bRMX\d{4}', re.I), 'realme'),
    (re.compile(r'motorola|\bmoto\b', re.I), 'Motorola'),
    (re.compile(r'\bnokia\b', re.I), 'Nokia'),
    (re.compile(r'\bsony\b|\bXperia\b', re.I), 'Sony'),
)

_android_model_re = re.compile(r'Android\s[\d.]+;\s*(?:[a-z]{2}[-_][a-z]{2};\s*)?([^;)]+?)(?:\sBuild/[^;)]*)?\)', re.I)
_apple_chip_re = re.compile(r'\bApple (M\d+)(?: (Pro|Max|Ultra))?\b')

# Reduced user agents report a placeholder instead of the model
_PLACEHOLDER_MODELS = {'k', 'mobile', 'linux', 'wv'}


@dataclass
class DeviceSignals:
    """
    Ambient client signals used for classification.

    gpu_renderer may be a plain string or a zero-argument callable that
    fetches it; a failing callable is treated as "not available".
    """

    user_agent: str = ''
    platform: str = ''
    pixel_ratio: Optional[float] = None
    screen_width: Optional[int] = None
    screen_height: Optional[int] = None
    gpu_renderer: Union[str, Callable[[], Optional[str]], None] = None

    def physical_resolution(self):
        """
        Physical pixel size as (short side, long side), or None.

        Orientation independent so landscape reports match the tables.
        """
        try:
            ratio = float(self.pixel_ratio or 1)
            width = round(float(self.screen_width) * ratio)
            height = round(float(self.screen_height) * ratio)
        except (TypeError, ValueError, OverflowError):
            return None
        if width <= 0 or height <= 0:
            return None
        return (min(width, height), max(width, height))


def _ua(signals):
    return signals.user_agent or ''


def _is_mobile_apple(signals):
    return bool(re.search(r'iPhone|iPad|iPod', _ua(signals)))


def _is_android(signals):
    return 'android' in _ua(signals).lower()


def _is_desktop_apple(signals):
    ua = _ua(signals)
    return 'Macintosh' in ua or 'Mac OS X' in ua or (signals.platform or '').startswith('Mac')


def _is_windows(signals):
    return 'Windows' in _ua(signals) or (signals.platform or '').startswith('Win')


def _is_linux(signals):
    ua = _ua(signals)
    return bool(re.search(r'Linux|X11|CrOS', ua)) or 'linux' in (signals.platform or '').lower()


def _resolve_mobile_apple(signals):
    if 'iPad' in _ua(signals):
        return GENERIC_IPAD
    model = IPHONE_MODELS.get(signals.physical_resolution())
    if model:
        return f"{model} (iOS)"
    return GENERIC_IPHONE


def _read_renderer(signals):
    renderer = signals.gpu_renderer
    if callable(renderer):
        try:
            renderer = renderer()
        except Exception as e:
            logger.debug(f"GPU renderer probe failed: {e}")
            return None
    if not isinstance(renderer, str):
        return None
    return renderer


def _mac_chip(renderer):
    if not renderer:
        return None
    match = _apple_chip_re.search(renderer)
    if match:
        chip, tier = match.groups()
        return f"{chip} {tier}" if tier else chip
    if 'intel' in renderer.lower():
        return 'Intel'
    return None


def _resolve_desktop_apple(signals):
    model = MAC_MODELS.get(signals.physical_resolution())
    chip = _mac_chip(_read_renderer(signals))
    if model and chip:
        return f"{model} ({chip}, macOS)"
    if model:
        return f"{model} (macOS)"
    if chip:
        return f"Mac ({chip}, macOS)"
    return GENERIC_MAC


def _android_model(ua):
    match = _android_model_re.search(ua)
    if not match:
        return None
    model = match.group(1).strip()
    if not model or model.lower() in _PLACEHOLDER_MODELS:
        return None
    return model


def _resolve_android(signals):
    ua = _ua(signals)
    model = _android_model(ua)
    manufacturer = None
    for pattern, name in ANDROID_MANUFACTURERS:
        if pattern.search(ua):
            manufacturer = name
            break

    if manufacturer and model:
        if model.lower().startswith(manufacturer.lower()):
            return f"{model} (Android)"
        return f"{manufacturer} {model} (Android)"
    if manufacturer:
        return f"{manufacturer} (Android)"
    if model:
        return f"{model} (Android)"
    return GENERIC_ANDROID


# Order matters: iOS and Android user agents also mention Mac OS X / Linux
DEFAULT_RULES = (
    (_is_mobile_apple, _resolve_mobile_apple),
    (_is_android, _resolve_android),
    (_is_desktop_apple, _resolve_desktop_apple),
    (_is_windows, lambda signals: WINDOWS_PC),
    (_is_linux, lambda signals: LINUX_PC),
)


class DeviceFingerprinter:
    """
    Prioritized (predicate, resolver) chain over DeviceSignals.

    The first matching predicate wins. Any unexpected error in a rule is
    logged and classification falls back to UNKNOWN_DEVICE.
    """

    def __init__(self, rules=DEFAULT_RULES, fallback=UNKNOWN_DEVICE):
        self.rules = tuple(rules)
        self.fallback = fallback

    def classify(self, signals):
        """Return an advisory label for the device, never raises."""
        if signals is None:
            return self.fallback
        try:
            for predicate, resolver in self.rules:
                if predicate(signals):
                    return resolver(signals) or self.fallback
        except Exception:
            logger.exception("Device classification failed")
        return self.fallback
