"""Payload encoders: structured input -> QR content string.

Each supported type registers one encoder with ``@encoder``. Types nobody
registered pass through as text (strings) or compact JSON (everything else).
"""

from __future__ import annotations

import hashlib
import json
import logging
import re
from collections.abc import Callable
from datetime import date, datetime, timezone
from typing import Any
from urllib.parse import quote

from qrstudio.errors import EncodingError
from qrstudio.shapes.paths import fmt

logger = logging.getLogger(__name__)

PayloadEncoder = Callable[[Any], str]

_ENCODERS: dict[str, PayloadEncoder] = {}

_PHONE_NOISE = re.compile(r"[\s\-().]")
_URL_SCHEME = re.compile(r"^https?://", re.IGNORECASE)


def encoder(payload_type: str) -> Callable[[PayloadEncoder], PayloadEncoder]:
    def decorator(func: PayloadEncoder) -> PayloadEncoder:
        if payload_type in _ENCODERS:
            raise ValueError(f"Duplicate payload encoder: {payload_type}")
        _ENCODERS[payload_type] = func
        return func
    return decorator


def is_supported(payload_type: object) -> bool:
    return isinstance(payload_type, str) and payload_type.strip().lower() in _ENCODERS


def encode(payload_type: str, data: Any) -> str:
    """Encode ``data`` for ``payload_type``. Raises ``EncodingError`` if either is missing."""
    if not payload_type or data is None or data == "":
        raise EncodingError("Type and data are required for encoding")
    key = str(payload_type).strip().lower()
    func = _ENCODERS.get(key)
    if func is None:
        logger.debug("No encoder for type %r, passing data through", key)
        if isinstance(data, str):
            return data
        return json.dumps(data, separators=(",", ":"), ensure_ascii=False)
    return func(data)


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def uri_component(value: Any) -> str:
    """Percent-encode like ECMAScript ``encodeURIComponent``."""
    return quote(str(value), safe="-_.!~*'()")


def _get(data: Any, *keys: str, default: Any = "") -> Any:
    """First truthy value among ``keys``; non-dict data has no fields."""
    if not isinstance(data, dict):
        return default
    for key in keys:
        value = data.get(key)
        if value:
            return value
    return default


def _text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return fmt(value)
    return str(value)


def clean_phone(value: Any) -> str:
    return _PHONE_NOISE.sub("", _text(value))


def ensure_scheme(url: str) -> str:
    if not url:
        return ""
    url = url.strip()
    if not _URL_SCHEME.match(url):
        return f"https://{url}"
    return url


def _escape_wifi(value: str) -> str:
    return re.sub(r'([\\;,:"])', r"\\\1", value)


def _escape_text(value: Any) -> str:
    """Backslash-escape for vCard and iCalendar property values."""
    if not value:
        return ""
    return (
        _text(value)
        .replace("\\", "\\\\")
        .replace(";", "\\;")
        .replace(",", "\\,")
        .replace("\n", "\\n")
    )


# ---------------------------------------------------------------------------
# Simple types
# ---------------------------------------------------------------------------


@encoder("url")
def encode_url(data: Any) -> str:
    if isinstance(data, str):
        return ensure_scheme(data)
    return ensure_scheme(_text(_get(data, "url", "value")))


@encoder("text")
def encode_text(data: Any) -> str:
    if isinstance(data, str):
        return data
    return _text(_get(data, "text", "value", "content"))


@encoder("email")
def encode_email(data: Any) -> str:
    address = data if isinstance(data, str) else _get(data, "email", "to")
    params = []
    for name, keys in (
        ("subject", ("subject",)),
        ("body", ("body", "message")),
        ("cc", ("cc",)),
        ("bcc", ("bcc",)),
    ):
        value = _get(data, *keys)
        if value:
            params.append(f"{name}={uri_component(value)}")
    mailto = f"mailto:{uri_component(address)}"
    if params:
        mailto += "?" + "&".join(params)
    return mailto


@encoder("phone")
def encode_phone(data: Any) -> str:
    phone = data if isinstance(data, (str, int)) else _get(data, "phone", "number", "tel")
    return f"tel:{clean_phone(phone)}"


@encoder("sms")
def encode_sms(data: Any) -> str:
    phone = data if isinstance(data, str) else _get(data, "phone", "number")
    message = _get(data, "message", "body")
    if message:
        return f"sms:{clean_phone(phone)}?body={uri_component(message)}"
    return f"sms:{clean_phone(phone)}"


@encoder("whatsapp")
def encode_whatsapp(data: Any) -> str:
    phone = data if isinstance(data, str) else _get(data, "phone", "number")
    phone = clean_phone(phone).lstrip("+")
    message = _get(data, "message", "text")
    url = f"https://wa.me/{phone}"
    if message:
        url += f"?text={uri_component(message)}"
    return url


@encoder("wifi")
def encode_wifi(data: Any) -> str:
    """``WIFI:T:<enc>;S:<ssid>;P:<password>;H:<hidden>;;``"""
    ssid = _text(_get(data, "ssid", "networkName", "name", "network"))
    password = _text(_get(data, "password", "pass"))
    encryption = _text(_get(data, "encryption", "security", "type", default="WPA")).upper()
    hidden = bool(_get(data, "hidden", "isHidden", default=False))

    content = f"WIFI:T:{encryption};S:{_escape_wifi(ssid)};"
    if password and encryption != "NOPASS":
        content += f"P:{_escape_wifi(password)};"
    content += f"H:{'true' if hidden else 'false'};;"
    return content


@encoder("location")
def encode_location(data: Any) -> str:
    lat = _get(data, "latitude", "lat", default=0)
    lng = _get(data, "longitude", "lng", "lon", default=0)
    query = _get(data, "query", "address", "name")

    if query and not lat and not lng:
        return f"https://maps.google.com/maps?q={uri_component(query)}"
    geo = f"geo:{_text(lat)},{_text(lng)}"
    if query:
        return f"{geo}?q={uri_component(query)}"
    return geo


# ---------------------------------------------------------------------------
# vCard
# ---------------------------------------------------------------------------

_VCARD_SOCIAL = ("facebook", "twitter", "linkedin", "instagram", "youtube", "github", "tiktok")


def _full_name(data: dict[str, Any]) -> str:
    explicit = _get(data, "fullName", "full_name")
    if explicit:
        return _text(explicit)
    parts = [
        _get(data, "prefix", "title"),
        _get(data, "firstName", "given_name", "name"),
        _get(data, "middleName", "middle_name"),
        _get(data, "lastName", "surname", "family_name"),
        _get(data, "suffix"),
    ]
    return " ".join(_text(p) for p in parts if p) or "Unknown"


def _vcard_tel(version: str, kind: str, number: Any) -> str:
    if version == "4.0":
        return f"TEL;TYPE={kind.lower()};VALUE=uri:tel:{clean_phone(number)}"
    return f"TEL;TYPE={kind.upper()}:{_text(number)}"


def _vcard_email(version: str, kind: str, address: Any) -> str:
    kind = kind.lower() if version == "4.0" else kind.upper()
    return f"EMAIL;TYPE={kind}:{_text(address)}"


def _vcard_phones(data: dict[str, Any], version: str) -> list[str]:
    lines = []
    for kind, keys in (
        ("cell", ("phone", "mobile", "cell")),
        ("work", ("work_phone", "workPhone")),
        ("home", ("home_phone", "homePhone")),
        ("fax", ("fax",)),
    ):
        number = _get(data, *keys)
        if number:
            lines.append(_vcard_tel(version, kind, number))
    for entry in data.get("phones") or []:
        number = _get(entry, "number", "phone", "value")
        if number:
            lines.append(_vcard_tel(version, _text(_get(entry, "type", default="cell")), number))
    return lines


def _vcard_emails(data: dict[str, Any], version: str) -> list[str]:
    lines = []
    if data.get("email"):
        lines.append(_vcard_email(version, "internet", data["email"]))
    work = _get(data, "work_email", "workEmail")
    if work:
        lines.append(_vcard_email(version, "work", work))
    for entry in data.get("emails") or []:
        address = _get(entry, "email", "address", "value")
        if address:
            lines.append(_vcard_email(version, _text(_get(entry, "type", default="internet")), address))
    return lines


def _vcard_address(data: dict[str, Any], version: str) -> str | None:
    address = data.get("address") if isinstance(data.get("address"), dict) else {}
    street = _get(address, "street") or _get(data, "street", "address_line1")
    extended = _get(address, "extended") or _get(data, "address_line2")
    city = _get(address, "city") or _get(data, "city")
    state = _get(address, "state") or _get(data, "state", "region")
    postal = _get(address, "postalCode", "zip") or _get(data, "postalCode", "zip", "postal_code")
    country = _get(address, "country") or _get(data, "country")
    po_box = _get(address, "poBox") or _get(data, "po_box")

    if not (street or city or state or postal or country):
        return None
    kind = _text(_get(address, "type") or _get(data, "address_type", default="home"))
    kind = kind.lower() if version == "4.0" else kind.upper()
    value = ";".join(_escape_text(v) for v in (po_box, extended, street, city, state, postal, country))
    return f"ADR;TYPE={kind}:{value}"


def _vcard_photo(photo: str) -> str | None:
    if photo.startswith("data:image"):
        m = re.match(r"data:([^;]+)", photo)
        mime_type = m.group(1) if m else "image/jpeg"
        b64 = photo.split(",", 1)[1] if "," in photo else ""
        return f"PHOTO;ENCODING=b;TYPE={mime_type.split('/')[1].upper()}:{b64}"
    if photo.startswith("http"):
        return f"PHOTO;VALUE=uri:{photo}"
    return None


@encoder("vcard")
def encode_vcard(data: Any) -> str:
    if not isinstance(data, dict):
        data = {"fullName": _text(data)}
    version = _text(data.get("version") or "3.0")
    lines = ["BEGIN:VCARD", f"VERSION:{version}", f"FN:{_escape_text(_full_name(data))}"]

    name_parts = (
        _get(data, "lastName", "surname", "family_name"),
        _get(data, "firstName", "given_name", "name"),
        _get(data, "middleName", "middle_name"),
        _get(data, "prefix", "title"),
        _get(data, "suffix"),
    )
    lines.append("N:" + ";".join(_escape_text(p) for p in name_parts))

    org = _get(data, "organization", "company", "org")
    if org:
        department = _get(data, "department")
        lines.append(f"ORG:{_escape_text(org)};{_escape_text(department)}" if department else f"ORG:{_escape_text(org)}")

    title = _get(data, "title", "jobTitle", "job_title")
    if title:
        lines.append(f"TITLE:{_escape_text(title)}")

    lines.extend(_vcard_phones(data, version))
    lines.extend(_vcard_emails(data, version))

    website = _get(data, "website", "url", "web")
    if website:
        lines.append(f"URL:{_text(website)}")

    adr = _vcard_address(data, version)
    if adr:
        lines.append(adr)

    birthday = _get(data, "birthday", "bday")
    if birthday:
        lines.append(f"BDAY:{_text(birthday).replace('-', '')}")

    note = _get(data, "note", "notes")
    if note:
        lines.append(f"NOTE:{_escape_text(note)}")

    photo = _get(data, "photo", "image")
    if photo:
        line = _vcard_photo(_text(photo))
        if line:
            lines.append(line)

    for network in _VCARD_SOCIAL:
        if data.get(network):
            lines.append(f"X-SOCIALPROFILE;TYPE={network}:{_text(data[network])}")

    lines.append("END:VCARD")
    return "\r\n".join(lines)


# ---------------------------------------------------------------------------
# Event (iCalendar)
# ---------------------------------------------------------------------------


def parse_datetime(value: Any) -> datetime | None:
    """ISO string, date, datetime or epoch milliseconds -> aware UTC datetime."""
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    elif isinstance(value, (int, float)) and not isinstance(value, bool):
        dt = datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    elif isinstance(value, str) and value.strip():
        try:
            dt = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def ical_timestamp(dt: datetime) -> str:
    return dt.strftime("%Y%m%dT%H%M%SZ")


def _event_time(value: Any, field: str) -> datetime:
    dt = parse_datetime(value)
    if dt is None:
        if value:
            logger.warning("Unparseable event %s %r, using current time", field, value)
        dt = datetime.now(timezone.utc).replace(microsecond=0)
    return dt


@encoder("event")
def encode_event(data: Any) -> str:
    """VCALENDAR with one VEVENT.

    UID defaults to a digest of the event body and DTSTAMP to an explicit
    ``dtstamp`` or DTSTART, so the same input always yields the same content.
    """
    if not isinstance(data, dict):
        data = {"summary": _text(data)}

    start = _event_time(_get(data, "start", "startDate", "start_date"), "start")
    dtstart = ical_timestamp(start)

    body = [f"SUMMARY:{_escape_text(_get(data, 'summary', 'title', 'name', default='Event'))}"]
    description = _get(data, "description", "details")
    if description:
        body.append(f"DESCRIPTION:{_escape_text(description)}")
    location = _get(data, "location", "venue")
    if location:
        body.append(f"LOCATION:{_escape_text(location)}")

    if _get(data, "allDay", "all_day", default=False):
        body.append(f"DTSTART;VALUE=DATE:{dtstart[:8]}")
    else:
        body.append(f"DTSTART:{dtstart}")

    end = _get(data, "end", "endDate", "end_date")
    if end:
        body.append(f"DTEND:{ical_timestamp(_event_time(end, 'end'))}")
    elif data.get("duration"):
        body.append(f"DURATION:PT{_text(data['duration'])}M")

    organizer = _get(data, "organizerEmail", "organizer")
    if organizer:
        organizer_name = _get(data, "organizerName")
        if organizer_name:
            body.append(f"ORGANIZER;CN={_escape_text(organizer_name)}:mailto:{_text(organizer)}")
        else:
            body.append(f"ORGANIZER:mailto:{_text(organizer)}")

    if data.get("url"):
        body.append(f"URL:{_text(data['url'])}")

    minutes = _get(data, "reminder", "alarm")
    if minutes:
        if minutes is True:
            minutes = 15
        body.extend([
            "BEGIN:VALARM",
            "ACTION:DISPLAY",
            f"TRIGGER:-PT{_text(minutes)}M",
            "DESCRIPTION:Reminder",
            "END:VALARM",
        ])

    uid = data.get("uid")
    if not uid:
        digest = hashlib.sha1("\n".join(body).encode("utf-8")).hexdigest()[:16]
        uid = f"{digest}@qrstudio"
    stamp = parse_datetime(data.get("dtstamp")) or start

    lines = [
        "BEGIN:VCALENDAR",
        "VERSION:2.0",
        "PRODID:-//qrstudio//EN",
        "BEGIN:VEVENT",
        f"UID:{_text(uid)}",
        f"DTSTAMP:{ical_timestamp(stamp)}",
        *body,
        "END:VEVENT",
        "END:VCALENDAR",
    ]
    return "\r\n".join(lines)


# ---------------------------------------------------------------------------
# Social and payments
# ---------------------------------------------------------------------------

SOCIAL_PROFILES = {
    "facebook": "https://facebook.com/{}",
    "twitter": "https://twitter.com/{}",
    "x": "https://x.com/{}",
    "instagram": "https://instagram.com/{}",
    "linkedin": "https://linkedin.com/in/{}",
    "youtube": "https://youtube.com/@{}",
    "tiktok": "https://tiktok.com/@{}",
    "snapchat": "https://snapchat.com/add/{}",
    "pinterest": "https://pinterest.com/{}",
    "reddit": "https://reddit.com/user/{}",
    "github": "https://github.com/{}",
    "telegram": "https://t.me/{}",
    "discord": "https://discord.gg/{}",
    "twitch": "https://twitch.tv/{}",
    "spotify": "https://open.spotify.com/user/{}",
}


@encoder("social")
def encode_social(data: Any) -> str:
    if isinstance(data, str):
        return ensure_scheme(data)
    url = _get(data, "url")
    if url:
        return ensure_scheme(_text(url))
    platform = _text(_get(data, "platform", "network", default="generic")).lower()
    username = _text(_get(data, "username", "handle", "user")).lstrip("@")
    template = SOCIAL_PROFILES.get(platform, f"https://{platform}.com/{{}}")
    return template.format(username)


CRYPTO_SCHEMES = {
    "btc": "bitcoin",
    "eth": "ethereum",
    "ltc": "litecoin",
    "doge": "dogecoin",
    "xmr": "monero",
    "zec": "zcash",
    "bch": "bitcoincash",
}


@encoder("crypto")
def encode_crypto(data: Any) -> str:
    currency = _text(_get(data, "currency", "coin", "crypto", default="bitcoin")).lower()
    scheme = CRYPTO_SCHEMES.get(currency, currency)
    address = data if isinstance(data, str) else _text(_get(data, "address", "wallet"))

    params = []
    amount = _get(data, "amount")
    if amount:
        params.append(f"amount={_text(amount)}")
    label = _get(data, "label", "name")
    if label:
        params.append(f"label={uri_component(label)}")
    message = _get(data, "message", "note")
    if message:
        params.append(f"message={uri_component(message)}")

    uri = f"{scheme}:{address}"
    if params:
        uri += "?" + "&".join(params)
    return uri


@encoder("upi")
def encode_upi(data: Any) -> str:
    vpa = data if isinstance(data, str) else _get(data, "vpa", "upiId", "upi_id")
    uri = f"upi://pay?pa={uri_component(vpa)}"

    payee = _get(data, "payeeName", "name", "pn")
    if payee:
        uri += f"&pn={uri_component(payee)}"
    amount = _get(data, "amount", "am")
    if amount:
        uri += f"&am={_text(amount)}"
    note = _get(data, "note", "tn")
    if note:
        uri += f"&tn={uri_component(note)}"
    transaction = _get(data, "transactionId", "tr")
    if transaction:
        uri += f"&tr={uri_component(transaction)}"
    uri += f"&cu={_text(_get(data, 'currency', 'cu', default='INR'))}"
    merchant = _get(data, "merchantCode", "mc")
    if merchant:
        uri += f"&mc={uri_component(merchant)}"
    return uri


@encoder("pix")
def encode_pix(data: Any) -> str:
    if isinstance(data, str):
        return data
    emv = _get(data, "emv", "qrCode")
    if emv:
        return _text(emv)

    url = f"https://pix.com.br/pay?key={uri_component(_get(data, 'key', 'pixKey', 'chave'))}"
    name = _get(data, "name", "merchantName")
    if name:
        url += f"&name={uri_component(name)}"
    city = _get(data, "city", "merchantCity")
    if city:
        url += f"&city={uri_component(city)}"
    amount = _get(data, "amount", "valor")
    if amount:
        url += f"&amount={_text(amount)}"
    description = _get(data, "description", "descricao")
    if description:
        url += f"&desc={uri_component(description)}"
    return url


PAYLOAD_TYPES: tuple[str, ...] = tuple(_ENCODERS)
