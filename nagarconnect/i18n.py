from typing import Dict, Optional

SUPPORTED_LANGUAGES = ("en", "hi")
DEFAULT_LANGUAGE = "en"

STATUS_LABELS: Dict[str, Dict[str, str]] = {
    "submitted": {"en": "Submitted", "hi": "सबमिट किया गया"},
    "acknowledged": {"en": "Acknowledged", "hi": "स्वीकार किया गया"},
    "in_progress": {"en": "In Progress", "hi": "प्रगति में"},
    "resolved": {"en": "Resolved", "hi": "हल किया गया"},
}

STATUS_COLORS: Dict[str, str] = {
    "submitted": "#3b82f6",
    "acknowledged": "#eab308",
    "in_progress": "#f97316",
    "resolved": "#22c55e",
}
FALLBACK_STATUS_COLOR = "#6b7280"

CATEGORY_LABELS: Dict[str, Dict[str, str]] = {
    "waste": {"en": "Waste", "hi": "कचरा"},
    "roads": {"en": "Roads", "hi": "सड़कें"},
    "streetlights": {"en": "Streetlights", "hi": "स्ट्रीटलाइट्स"},
    "water": {"en": "Water", "hi": "पानी"},
    "other": {"en": "Other", "hi": "अन्य"},
}

REQUEST_TYPE_LABELS: Dict[str, Dict[str, str]] = {
    "donation_certificate": {"en": "Donation Certificate", "hi": "दान प्रमाणपत्र"},
    "volunteer_certificate": {"en": "Volunteer Certificate", "hi": "स्वयंसेवक प्रमाणपत्र"},
    "event_stall": {"en": "Event Stall", "hi": "इवेंट स्टाल"},
    "event_organizer": {"en": "Event Organizer", "hi": "इवेंट आयोजक"},
}

CERTIFICATE_TEXT = {
    "en": (
        "NagarConnect Certificate\n"
        "\n"
        "Certificate Number: {number}\n"
        "Type: {type}\n"
        "Date Issued: {issued}\n"
        "\n"
        "This certificate is issued by NagarConnect Municipal Services.\n"
    ),
    "hi": (
        "नगरकनेक्ट प्रमाणपत्र\n"
        "\n"
        "प्रमाणपत्र संख्या: {number}\n"
        "प्रकार: {type}\n"
        "जारी करने की तिथि: {issued}\n"
        "\n"
        "यह प्रमाणपत्र नगरकनेक्ट नगरपालिका सेवाओं द्वारा जारी किया गया है।\n"
    ),
}

# In-app notification text per status reached
STATUS_NOTIFICATIONS: Dict[str, Dict[str, Dict[str, str]]] = {
    "submitted": {
        "title": {"en": "Status Update: SUBMITTED", "hi": "स्थिति अपडेट: सबमिट"},
        "message": {
            "en": "Your issue has been moved back to submitted for review.",
            "hi": "आपकी समस्या को समीक्षा के लिए फिर से सबमिट स्थिति में रखा गया है।",
        },
    },
    "acknowledged": {
        "title": {"en": "Status Update: ACKNOWLEDGED", "hi": "स्थिति अपडेट: स्वीकृत"},
        "message": {
            "en": "Your issue has been acknowledged by the authorities.",
            "hi": "आपकी समस्या को अधिकारियों ने स्वीकार कर लिया है।",
        },
    },
    "in_progress": {
        "title": {"en": "Status Update: IN PROGRESS", "hi": "स्थिति अपडेट: प्रगति पर"},
        "message": {
            "en": "Work has started on your issue.",
            "hi": "आपकी समस्या पर काम शुरू हो गया है।",
        },
    },
    "resolved": {
        "title": {"en": "Status Update: RESOLVED", "hi": "स्थिति अपडेट: समाधान"},
        "message": {
            "en": "Your issue has been resolved!",
            "hi": "आपकी समस्या का समाधान हो गया है!",
        },
    },
}

SUBMITTED_NOTIFICATION = {
    "title": {"en": "Issue Submitted", "hi": "समस्या दर्ज की गई"},
    "message": {
        "en": 'Your issue "{title}" has been submitted successfully.',
        "hi": 'आपकी समस्या "{title}" सफलतापूर्वक दर्ज कर ली गई है।',
    },
}

EMAIL_STRINGS: Dict[str, Dict[str, str]] = {
    "en": {
        "subject": 'Status Update: Your issue "{title}"',
        "brand": "NagarConnect",
        "tagline": "Citizen Issue Portal",
        "heading": "Status Update",
        "issue": "Issue",
        "new_status": "New Status",
        "resolved_note": "🎉 Your issue has been resolved! Please open the app to rate your experience.",
        "footer_note": "This is an automated notification. Please check the app for more details.",
        "copyright": "NagarConnect - Citizen Issue Portal",
    },
    "hi": {
        "subject": 'स्थिति अपडेट: आपकी समस्या "{title}"',
        "brand": "नगर कनेक्ट",
        "tagline": "नागरिक समस्या पोर्टल",
        "heading": "स्थिति अपडेट",
        "issue": "समस्या",
        "new_status": "नई स्थिति",
        "resolved_note": "🎉 आपकी समस्या का समाधान हो गया है! कृपया अपने अनुभव का मूल्यांकन करने के लिए ऐप खोलें।",
        "footer_note": "यह एक स्वचालित सूचना है। कृपया अधिक जानकारी के लिए ऐप देखें।",
        "copyright": "नगर कनेक्ट - नागरिक समस्या पोर्टल",
    },
}

MESSAGES: Dict[str, Dict[str, str]] = {
    "en": {
        "authentication_required": "Please login to continue.",
        "invalid_credentials": "Invalid email or password.",
        "invalid_token": "Invalid or expired token.",
        "email_taken": "An account with this email already exists.",
        "admin_required": "You need administrator privileges to do this.",
        "issue_not_found": "Issue not found.",
        "request_not_found": "Request not found.",
        "donation_not_found": "Donation not found.",
        "event_not_found": "Event not found.",
        "stall_not_found": "Stall not found.",
        "alert_not_found": "Alert not found.",
        "notification_not_found": "Notification not found.",
        "not_a_volunteer": "You must register as a volunteer first.",
        "already_requested": "You have already requested this certificate.",
        "already_registered": "You are already registered for this event.",
        "already_decided": "This request has already been reviewed.",
        "certificate_not_issued": "No certificate has been issued for this request.",
        "event_full": "This event is full.",
        "duplicate": "This record already exists.",
        "invalid_upload": "Please upload an image file.",
        "map_not_configured": "Map is not configured. Set MAPBOX_PUBLIC_TOKEN to enable it.",
        "internal_error": "Something went wrong. Please try again later.",
        "error": "Error occurred",
    },
    "hi": {
        "authentication_required": "कृपया जारी रखने के लिए लॉगिन करें।",
        "invalid_credentials": "अमान्य ईमेल या पासवर्ड।",
        "invalid_token": "अमान्य या समाप्त टोकन।",
        "email_taken": "इस ईमेल से एक खाता पहले से मौजूद है।",
        "admin_required": "इसके लिए आपको एडमिन अधिकारों की आवश्यकता है।",
        "issue_not_found": "समस्या नहीं मिली।",
        "request_not_found": "अनुरोध नहीं मिला।",
        "donation_not_found": "दान नहीं मिला।",
        "event_not_found": "कार्यक्रम नहीं मिला।",
        "stall_not_found": "स्टॉल नहीं मिला।",
        "alert_not_found": "अलर्ट नहीं मिला।",
        "notification_not_found": "सूचना नहीं मिली।",
        "not_a_volunteer": "आपको पहले स्वयंसेवक के रूप में पंजीकरण करना होगा।",
        "already_requested": "आप पहले ही इस प्रमाणपत्र का अनुरोध कर चुके हैं।",
        "already_registered": "आप पहले से ही इस कार्यक्रम के लिए पंजीकृत हैं।",
        "already_decided": "इस अनुरोध की समीक्षा पहले ही हो चुकी है।",
        "certificate_not_issued": "इस अनुरोध के लिए कोई प्रमाणपत्र जारी नहीं किया गया है।",
        "event_full": "यह कार्यक्रम भर चुका है।",
        "duplicate": "यह रिकॉर्ड पहले से मौजूद है।",
        "invalid_upload": "कृपया एक छवि फ़ाइल अपलोड करें।",
        "map_not_configured": "मानचित्र कॉन्फ़िगर नहीं है। इसे सक्षम करने के लिए MAPBOX_PUBLIC_TOKEN सेट करें।",
        "internal_error": "कुछ गलत हो गया। कृपया बाद में पुनः प्रयास करें।",
        "error": "त्रुटि हुई",
    },
}


def normalize_language(value: Optional[str]) -> str:
    """Map a query value or Accept-Language header to ``en`` or ``hi``."""
    if not value:
        return DEFAULT_LANGUAGE
    primary = value.split(",")[0].split(";")[0].strip().lower()
    primary = primary.split("-")[0]
    return primary if primary in SUPPORTED_LANGUAGES else DEFAULT_LANGUAGE


def t(key: str, language: str = DEFAULT_LANGUAGE) -> str:
    table = MESSAGES.get(language, MESSAGES[DEFAULT_LANGUAGE])
    return table.get(key) or MESSAGES[DEFAULT_LANGUAGE].get(key, key)


def status_label(status: str, language: str) -> str:
    labels = STATUS_LABELS.get(status)
    if not labels:
        return status
    return labels.get(language, labels[DEFAULT_LANGUAGE])


def category_label(category: str, language: str) -> str:
    labels = CATEGORY_LABELS.get(category)
    if not labels:
        return category
    return labels.get(language, labels[DEFAULT_LANGUAGE])


def status_color(status: str) -> str:
    return STATUS_COLORS.get(status, FALLBACK_STATUS_COLOR)


def request_type_label(request_type: str, language: str) -> str:
    labels = REQUEST_TYPE_LABELS.get(request_type)
    if not labels:
        return request_type
    return labels.get(language, labels[DEFAULT_LANGUAGE])
