"""English strings for the league bot."""

EN_STRINGS = {
    # === MENU ===
    "welcome": (
        "Hey {name}! Welcome to <b>Out Sports League</b> \U0001f3f3️‍\U0001f308\n\n"
        "Sign up for a season, sign your waivers, and keep up with games and scores."
    ),
    "menu_header": "What would you like to do?",
    "menu_register": "\U0001f4dd Register",
    "menu_substitute": "\U0001f504 Join sub pool",
    "menu_waiver": "✍️ Sign waiver",
    "menu_schedule": "\U0001f4c5 Schedule",
    "menu_scores": "\U0001f3c6 Live scores",
    "menu_standings": "\U0001f4ca Standings",
    "menu_news": "\U0001f4e2 Announcements",
    "menu_subscribe": "\U0001f514 Notifications",
    "back_to_menu": "← Menu",
    "cancelled": "Cancelled. Nothing was saved.",
    "unknown_input": "I didn't get that. Use /start to open the menu.",
    "help": (
        "/start - main menu\n"
        "/register - register for a season\n"
        "/substitute - join the substitute pool\n"
        "/waiver - sign a waiver\n"
        "/schedule - season schedule\n"
        "/scores - live scores\n"
        "/standings - team records\n"
        "/announcements - league news\n"
        "/subscribe, /unsubscribe - announcement notifications\n"
        "/cancel - stop the current form"
    ),
    "server_error": "⚠️ Something went wrong connecting to the server. Please try again in a minute.",

    # === COMMON ===
    "choose_sport": "Which sport?",
    "yes": "✓ Yes",
    "no": "✗ No",
    "skip": "Skip →",
    "back": "← Back",
    "try_again": "\U0001f501 Try again",

    # === PLAYER REGISTRATION ===
    "reg_step": "<b>{sport} registration</b> · Step {step}/{total} ({progress}%)",
    "reg_first_name": "What's your first name?",
    "reg_last_name": "And your last name?",
    "reg_email": "Your email address?",
    "reg_phone": "Your phone number? (10 digits)",
    "reg_emergency_contact_name": "Emergency contact name?",
    "reg_emergency_contact_phone": "Emergency contact phone? (10 digits)",
    "reg_shirt_size": "Shirt size?",
    "reg_experience_level": "Experience level?",
    "reg_how_did_you_hear": "How did you hear about us?",
    "reg_dietary_restrictions": "Any dietary restrictions? Type them or skip.",
    "reg_medical_conditions": "Any medical conditions we should know about? Type them or skip.",
    "reg_agree_to_terms": "Do you agree to the league terms and conditions?",
    "reg_agree_to_email_updates": "Would you like email updates about the league?",
    "reg_submitting": "Submitting your registration...",

    # === SUBSTITUTES ===
    "sub_header": "<b>{sport} substitute pool</b>",
    "sub_first_name": "What's your first name?",
    "sub_last_name": "And your last name?",
    "sub_preferred_pronouns": "Preferred pronouns? Type them or skip.",
    "sub_phone": "Phone number we can text when a team needs a sub? (10 digits)",
    "sub_emergency_contact_name": "Emergency contact name?",
    "sub_emergency_contact_phone": "Emergency contact phone? (10 digits)",
    "sub_agreements": (
        "To join the pool you need to:\n"
        "• agree to the liability waiver\n"
        "• agree to the photo release\n"
        "• agree to receive text messages\n"
        "• confirm you are 18 or older\n\n"
        "Do you agree to all of the above?"
    ),

    # === WAIVERS ===
    "waiver_choose_type": "Which waiver would you like to sign?",
    "waiver_liability": "\U0001f6e1 Liability waiver",
    "waiver_photo_release": "\U0001f4f8 Photo release",
    "waiver_name": "Participant full name (first and last)?",
    "waiver_dob": "Date of birth? (MM/DD/YYYY)",
    "waiver_dob_format": "Please enter your date of birth as MM/DD/YYYY.",
    "waiver_signature": "Type your full name again as your digital signature. It must match exactly.",
    "waiver_photo_permission": "Do you grant permission to use photos of you?",
    "photo_grant": "✓ Grant",
    "photo_withhold": "✗ Withhold",
    "waiver_acknowledge": (
        "By confirming you:\n"
        "{terms}"
        "• sign this waiver voluntarily\n"
        "• certify you are of legal age or have guardian authority"
    ),
    "waiver_acknowledge_terms": "• acknowledge the terms of the waiver\n",
    "waiver_confirm": "✓ I confirm",
    "waiver_done": "{message}\n\nConfirmation number: <code>{confirmation}</code>",

    # === LEAGUE VIEWS ===
    "schedule_empty": "No games scheduled yet.",
    "scores_empty": "No games in progress right now.",
    "standings_empty": "No teams yet.",
    "news_empty": "No announcements right now.",
    "week_header": "<b>Week {week}</b> · {start} - {end}",
    "tbd": "TBD",

    # === NOTIFICATIONS ===
    "subscribe_prompt": "Get league announcements here in Telegram?",
    "subscribe_on": "\U0001f514 Turn on",
    "subscribe_off": "\U0001f515 Turn off",
    "subscribed": "\U0001f514 You'll get league announcements here.",
    "unsubscribed": "\U0001f515 Announcements turned off.",

    # === ADMIN ===
    "admin_only": "This command is for league admins.",
    "stats": (
        "<b>League stats</b>\n"
        "Teams: {teams}\nPlayers: {players}\nGames: {games} "
        "({upcoming} upcoming, {completed} completed)\nLocations: {locations}"
    ),

    # === THROTTLING ===
    "throttled": "You're sending too many requests. Please wait a moment.",
    "throttled_short": "Too many requests. Please wait.",
}
