"""
SEO Schema
schema.org JSON-LD documents for the storefront pages
"""
from typing import Any, Dict, List

BUSINESS_NAME = "LIQUIDO Vape Shop"
LOGO_PATH = "/assets/images/Goccia LIQUIDO/GOCCIA Y_W.png"
TELEPHONE = "+39-379-134-5367"
EMAIL = "info.vaporoom@gmail.com"

ADDRESS = {
    "@type": "PostalAddress",
    "streetAddress": "via Adige 43C",
    "addressLocality": "Monterotondo",
    "postalCode": "00015",
    "addressRegion": "RM",
    "addressCountry": "IT",
}

OPENING_HOURS = [
    {
        "@type": "OpeningHoursSpecification",
        "dayOfWeek": ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday"],
        "opens": "10:00",
        "closes": "21:00",
    },
    {"@type": "OpeningHoursSpecification", "dayOfWeek": "Saturday", "opens": "11:00", "closes": "22:00"},
    {"@type": "OpeningHoursSpecification", "dayOfWeek": "Sunday", "opens": "12:00", "closes": "18:00"},
]

FAQ = [
    (
        "Quali sono i migliori liquidi vape disponibili a Monterotondo?",
        "Presso LIQUIDO vape shop a Monterotondo (Roma) troverai una selezione premium di liquidi vape "
        "delle migliori marche: Dinner Lady, Vaporesso, GeekVape, Voopoo e molti altri. I nostri liquidi "
        "vape sono selezionati per garantire qualità, sicurezza e sapore eccezionale.",
    ),
    (
        "Offrite servizi di pulizia e manutenzione vape a Monterotondo?",
        "Sì, presso LIQUIDO vape shop a Monterotondo (Roma) offriamo servizi completi di pulizia "
        "dispositivi vape e manutenzione vape. I nostri servizi includono: pulizia completa del "
        "dispositivo vape, pulizia del tank, cambio coil, sostituzione del cotone dell'atomizzatore, "
        "e manutenzione generale.",
    ),
    (
        "Dove si trova il vostro negozio vape a Monterotondo?",
        "Il nostro vape shop LIQUIDO si trova a Monterotondo (Roma) in via Adige 43C, CAP 00015. Siamo "
        "facilmente raggiungibili da Roma e dalle zone limitrofe. Il nostro negozio vape è aperto dal "
        "lunedì al venerdì dalle 10:00 alle 21:00, sabato dalle 11:00 alle 22:00, e domenica dalle "
        "12:00 alle 18:00.",
    ),
    (
        "Come pulire correttamente il mio dispositivo vape?",
        "Per pulire correttamente il tuo dispositivo vape, smonta tutte le parti (tank, coil, drip tip) "
        "e sciacquale con acqua calda. Per una pulizia più approfondita, puoi utilizzare alcol "
        "isopropilico per rimuovere residui di liquidi vape. Asciuga accuratamente tutte le parti prima "
        "di riassemblare.",
    ),
    (
        "Come conservare correttamente i liquidi vape?",
        "Per conservare correttamente i liquidi vape, è importante mantenerli in un luogo fresco e "
        "asciutto, lontano dalla luce diretta del sole. La temperatura ideale è tra i 15°C e i 25°C. "
        "Conserva i liquidi vape in posizione verticale con il tappo ben chiuso per evitare "
        "l'ossidazione.",
    ),
    (
        "Quali servizi offrite oltre alla vendita di liquidi e dispositivi vape?",
        "Oltre alla vendita di liquidi vape e dispositivi vape, il nostro vape shop a Monterotondo "
        "offre: servizi di pulizia dispositivi vape, manutenzione vape professionale, pulizia tank, "
        "cambio coil, sostituzione cotone atomizzatore, consulenza personalizzata, assistenza tecnica, "
        "e possibilità di ordinare prodotti speciali su richiesta.",
    ),
]

LOCAL_BUSINESS_PAGES = ("index.html", "contact.html", "about.html")


def organization_schema(base_url: str) -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": "Organization",
        "name": BUSINESS_NAME,
        "url": base_url,
        "logo": f"{base_url}{LOGO_PATH}",
        "description": (
            "Negozio vape premium a Monterotondo (Roma) specializzato in liquidi vape, dispositivi vape, "
            "servizi pulizia e manutenzione vape."
        ),
        "address": ADDRESS,
        "contactPoint": {
            "@type": "ContactPoint",
            "telephone": TELEPHONE,
            "contactType": "customer service",
            "email": EMAIL,
            "areaServed": ["IT"],
            "availableLanguage": ["it", "en"],
        },
        "sameAs": [
            "https://www.instagram.com/liquido.vapeshop/",
            "https://www.facebook.com/liquido.vapeshop/",
        ],
    }


def local_business_schema(base_url: str) -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": "VapeShop",
        "name": BUSINESS_NAME,
        "image": f"{base_url}{LOGO_PATH}",
        "description": (
            "Vape shop premium a Monterotondo (Roma): liquidi vape, dispositivi vape, servizi pulizia "
            "e manutenzione vape."
        ),
        "address": ADDRESS,
        "geo": {"@type": "GeoCoordinates", "latitude": 42.05, "longitude": 12.6167},
        "telephone": TELEPHONE,
        "email": EMAIL,
        "url": base_url,
        "priceRange": "€€",
        "openingHoursSpecification": OPENING_HOURS,
        "hasOfferCatalog": {
            "@type": "OfferCatalog",
            "name": "Prodotti Vape",
            "itemListElement": [
                {"@type": "OfferCatalog", "name": "Liquidi Vape"},
                {"@type": "OfferCatalog", "name": "Dispositivi Vape"},
                {"@type": "OfferCatalog", "name": "Servizi Pulizia e Manutenzione Vape"},
            ],
        },
    }


def faq_page_schema() -> Dict[str, Any]:
    return {
        "@context": "https://schema.org",
        "@type": "FAQPage",
        "mainEntity": [
            {
                "@type": "Question",
                "name": question,
                "acceptedAnswer": {"@type": "Answer", "text": answer},
            }
            for question, answer in FAQ
        ],
    }


def schemas_for_page(path: str, base_url: str) -> List[Dict[str, Any]]:
    """
    JSON-LD documents to embed on a page

    Organization everywhere, LocalBusiness on home/contact/about, FAQPage on
    the FAQ page.
    """
    schemas = [organization_schema(base_url)]
    if any(page in path for page in LOCAL_BUSINESS_PAGES):
        schemas.append(local_business_schema(base_url))
    if "faq.html" in path:
        schemas.append(faq_page_schema())
    return schemas
