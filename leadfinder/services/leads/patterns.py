"""Static rule tables for query building, scoring and enrichment.

Everything here is built once at import time and never mutated. Maps are
wrapped in MappingProxyType and lists are tuples so they can be shared by
concurrent requests.
"""

from types import MappingProxyType

SUPPORTED_LOCALES: tuple[str, ...] = ("en", "es", "pt", "de", "fr")
DEFAULT_LOCALE = "en"

# Checked in this order; the first list containing the country wins.
LOCALE_COUNTRIES: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("es", ("spain", "mexico", "chile", "argentina", "colombia", "peru")),
    ("pt", ("brazil", "portugal")),
    ("de", ("germany", "austria", "switzerland")),
    ("fr", ("france",)),
)

CHANNEL_TEMPLATES: MappingProxyType = MappingProxyType(
    {
        "en": (
            "forklift dealer",
            "material handling dealer",
            "mhe distributor",
            "forklift rental",
            "forklift sales and service",
            "used forklift",
            "forklift parts",
            "warehouse equipment distributor",
        ),
        "es": (
            "distribuidor de montacargas",
            "concesionario de montacargas",
            "alquiler de montacargas",
            "venta y servicio de montacargas",
            "carretillas elevadoras distribuidor",
        ),
        "pt": (
            "revendedor de empilhadeiras",
            "distribuidor de empilhadeira",
            "locação de empilhadeiras",
            "venda e assistência técnica",
            "peças empilhadeira",
        ),
        "de": (
            "Gabelstapler Händler",
            "Vertriebspartner",
            "Mietstapler",
            "Service Gabelstapler",
            "Gabelstapler Ersatzteile",
        ),
        "fr": (
            "concessionnaire chariots élévateurs",
            "distributeur manutention",
            "location chariots élévateurs",
            "vente et service",
            "pièces chariots élévateurs",
        ),
    }
)

# Manufacturer domains. Suffix match only, so dealer subdomains elsewhere survive.
OEM_BLOCKLIST_SUFFIXES: tuple[str, ...] = (
    ".hyster.com",
    ".hyster-yale.com",
    ".toyotaforklift.com",
    ".toyotaforklifts.com",
    ".toyotamaterialhandling.com",
    ".jungheinrich.com",
    ".jungheinrich.cn",
    ".crown.com",
    ".linde-mh.com",
    ".linde-mh.cn",
    ".still.de",
    ".still.com",
    ".komatsu.com",
    ".logisnext.com",
    ".mitsubishi-logisnext.com",
    ".hyundai-ce.com",
    ".doosan.com",
    ".kalmarglobal.com",
)

OEM_KEYWORDS: tuple[str, ...] = (
    "hyster",
    "toyota",
    "jungheinrich",
    "crown",
    "linde",
    "still",
    "komatsu",
    "mitsubishi",
    "hyundai",
    "doosan",
    "kalmar",
)

_POSITIVE_BY_LOCALE = {
    "en": ("dealer", "distributor", "rental", "service", "parts", "used forklift", "warehouse"),
    "es": (
        "concesionario",
        "distribuidor",
        "alquiler",
        "servicio",
        "repuestos",
        "montacargas",
        "carretillas elevadoras",
    ),
    "pt": ("revendedor", "distribuidor", "locação", "assistência", "peças", "empilhadeira", "empilhadeiras"),
    "de": ("händler", "miet", "service", "ersatzteile", "gabelstapler"),
    "fr": ("concessionnaire", "location", "pièces", "chariots élévateurs"),
}

# Flattened with duplicates removed: each distinct keyword scores once.
POSITIVE_KEYWORDS: tuple[str, ...] = tuple(
    dict.fromkeys(kw for kws in _POSITIVE_BY_LOCALE.values() for kw in kws)
)

FORKLIFT_TERMS: tuple[str, ...] = (
    "forklift",
    "mhe",
    "montacargas",
    "carretillas elevadoras",
    "empilhadeira",
    "empilhadeiras",
    "gabelstapler",
    "chariots élévateurs",
)

CONTACT_TERMS: tuple[str, ...] = ("contact", "contacto", "contato", "kontakt")

BASE_SCORE = 10
POSITIVE_KEYWORD_BONUS = 12
FORKLIFT_TERM_BONUS = 15
CONTACT_TERM_BONUS = 6
OEM_PENALTY = 28
DEALER_MODE_BONUS = 5

DEALER_SCORE_THRESHOLD = 35
NON_EN_DEALER_THRESHOLD = 28

# Ordered (tag, terms) rules; tags come out in this order.
TAG_RULES: tuple[tuple[str, tuple[str, ...]], ...] = (
    (
        "dealer",
        ("dealer", "distributor", "concesionario", "distribuidor", "revendedor", "händler", "concessionnaire"),
    ),
    ("rental", ("rental", "alquiler", "arriendo", "locação", "miet")),
    ("service", ("service", "servicio", "serviço", "assistência", "kundendienst")),
    ("parts", ("parts", "pieza", "repuestos", "peças", "ersatzteile", "pièces")),
)

ENRICH_BASE_PATHS: tuple[str, ...] = ("/", "/contact", "/contact-us", "/about", "/about-us")

ENRICH_LOCALIZED_PATHS: MappingProxyType = MappingProxyType(
    {
        "es": ("/contacto", "/contactenos", "/acerca", "/acerca-de"),
        "pt": ("/contato", "/fale-conosco"),
        "de": ("/kontakt", "/uber-uns"),
        "fr": ("/contact", "/a-propos"),
    }
)

PLACEHOLDER_EMAIL_DOMAINS: tuple[str, ...] = (
    "example.com",
    "example.org",
    "example.net",
    "domain.com",
)
