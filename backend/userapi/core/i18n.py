# backend/userapi/core/i18n.py
"""Message catalogs and Accept-Language handling."""
from userapi.core.config import settings

MESSAGES: dict[str, dict[str, str]] = {
    "en": {
        "username_not_null": "Username cannot be null",
        "username_size": "Must have min 4 and max 32 characters",
        "email_not_null": "E-mail cannot be null",
        "email_not_valid": "E-mail is not valid",
        "email_in_use": "E-mail in use",
        "password_not_null": "Password cannot be null",
        "password_size": "Password must be at least 8 characters",
        "password_pattern": "Password must have at least 1 uppercase, 1 lowercase letter and 1 number",
        "user_create_success": "User created",
        "email_failure": "E-mail failure",
        "validation_failure": "Validation failure",
        "account_activation_failure": "This account is either active or the token is invalid",
        "account_activation_success": "Account is activated",
        "user_not_found": "User not found",
        "authentication_failure": "Incorrect credentials",
        "inactive_authentication_failure": "Account is inactive",
        "unauthorised_user_update": "You are not authorized to update user",
        "unauthorised_user_delete": "You are not authorized to delete user",
        "unauthorised_password_reset": "You are not authorized to update your password. Please follow the password reset steps again.",
        "email_not_in_use": "E-mail is not in use",
        "password_reset_request_success": "Check your e-mail for resetting your password",
        "profile_image_size": "Your profile image cannot be bigger than 2MB",
        "unsupported_file_type": "Only JPEG or PNG files are allowed",
        "logout_success": "Logged out",
        "service_unavailable": "Service temporarily unavailable",
        "internal_error": "Internal server error",
    },
    "is": {
        "username_not_null": "Notandanafn má ekki vera tómt",
        "username_size": "Verður að vera minnst 4 og mest 32 stafir",
        "email_not_null": "Netfang má ekki vera tómt",
        "email_not_valid": "Netfang er ekki gilt",
        "email_in_use": "Netfang er þegar í notkun",
        "password_not_null": "Lykilorð má ekki vera tómt",
        "password_size": "Lykilorð verður að vera minnst 8 stafir",
        "password_pattern": "Lykilorð verður að innihalda minnst 1 hástaf, 1 lágstaf og 1 tölustaf",
        "user_create_success": "Notandi stofnaður",
        "email_failure": "Villa við sendingu tölvupósts",
        "validation_failure": "Villa í innsendum gögnum",
        "account_activation_failure": "Aðgangurinn er þegar virkur eða tókinn er ógildur",
        "account_activation_success": "Aðgangur virkjaður",
        "user_not_found": "Notandi fannst ekki",
        "authentication_failure": "Rangar innskráningarupplýsingar",
        "inactive_authentication_failure": "Aðgangurinn er óvirkur",
        "unauthorised_user_update": "Þú hefur ekki heimild til að uppfæra notanda",
        "unauthorised_user_delete": "Þú hefur ekki heimild til að eyða notanda",
        "unauthorised_password_reset": "Þú hefur ekki heimild til að breyta lykilorði. Vinsamlegast endurtaktu endurstillingu lykilorðs.",
        "email_not_in_use": "Netfangið er ekki í notkun",
        "password_reset_request_success": "Athugaðu tölvupóstinn þinn til að endurstilla lykilorðið",
        "profile_image_size": "Prófílmynd má ekki vera stærri en 2MB",
        "unsupported_file_type": "Aðeins JPEG eða PNG skrár eru leyfðar",
        "logout_success": "Útskráning tókst",
        "service_unavailable": "Þjónustan er tímabundið ekki aðgengileg",
        "internal_error": "Innri villa í þjóni",
    },
}

SUPPORTED_LANGUAGES = tuple(MESSAGES)


def detect_language(accept_language: str | None) -> str:
    """Pick the best supported language from an Accept-Language header.

    Tags are tried in quality order; region subtags are ignored
    ("is-IS" matches "is"). Falls back to the configured default.
    """
    if not accept_language:
        return settings.default_language

    candidates: list[tuple[float, int, str]] = []
    for index, part in enumerate(accept_language.split(",")):
        pieces = part.strip().split(";")
        tag = pieces[0].strip().lower()
        if not tag:
            continue
        quality = 1.0
        for param in pieces[1:]:
            name, _, value = param.strip().partition("=")
            if name == "q":
                try:
                    quality = float(value)
                except ValueError:
                    quality = 0.0
        candidates.append((-quality, index, tag))

    for _, _, tag in sorted(candidates):
        primary = tag.split("-")[0]
        if primary in MESSAGES:
            return primary

    return settings.default_language


def translate(key: str, language: str | None = None) -> str:
    """Look up a message, falling back to English and then to the key itself."""
    catalog = MESSAGES.get(language or settings.default_language, MESSAGES["en"])
    return catalog.get(key) or MESSAGES["en"].get(key, key)
