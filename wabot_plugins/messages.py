"""
Centralised user-facing strings so the dispatcher and the command modules
can import them without circular dependencies.
"""

# Generic catch-all
INTERNAL_ERROR        = "An internal error occurred while processing your command."

# --- unknown commands ---
UNKNOWN_COMMAND       = "❓ Unknown command: *{prefix}{command}*"
DID_YOU_MEAN          = "Did you mean?"

# --- delay ---
INVALID_NUMBER        = "❌ Invalid number."
DELAY_CURRENT         = "✅ Current max reply delay: *{seconds}s*\n\nSet:\n{prefix}delay <seconds>\n{prefix}delay 0  (off)"
DELAY_SET             = "✅ Max reply delay set to: *{seconds}s*"

# --- owner ---
OWNER_CURRENT         = "✅ Owner Name: *{name}*\n\nSet:\n{prefix}owner <name>"
OWNER_NAME_LENGTH     = "❌ Owner name must be 2 to 50 characters."
OWNER_UPDATED         = "✅ Owner name updated to: *{name}*"

# --- generic ---
GENERIC_USAGE         = "🧾 Generic name\nCurrent: {current}\n\nUsage:\n{prefix}generic <name>"
GENERIC_SET           = "✅ Generic name set to: *{name}*"

# --- approval list ---
APPROVE_USAGE         = "Usage:\n{prefix}approve <number>\n{prefix}revoke <number>\n{prefix}approved"
APPROVED_ADDED        = "✅ +{number} recorded as approved (info only)."
APPROVED_ALREADY      = "ℹ️ +{number} is already approved."
APPROVED_REMOVED      = "✅ +{number} removed from the approved list."
APPROVED_NOT_LISTED   = "ℹ️ +{number} is not on the approved list."
APPROVED_IS_DEV       = "❌ +{number} is a developer and always stays approved."
APPROVED_HEADER       = "✅ *Approved list* (info only)"
APPROVED_FOOTER       = "Approval is informational and does not grant access to any command."

# --- runtime ---
RUNTIME_TEXT          = "*Runtime Info*\n\n⏰ Hours: {hours}\n⏰ Minutes: {minutes}\n⏰ Seconds: {seconds}"

# --- reload ---
RELOAD_DONE           = "✅ Plugins reloaded.\nLoaded: {count}\nTime: {time}"
RELOAD_FAILED         = "❌ Plugin reload failed: {error}"

# --- prefix ---
PREFIX_CURRENT        = "✅ Current prefix: *{prefix}*\n\nSet:\n{prefix}setprefix <symbol>"
PREFIX_ONE_CHAR       = "❌ Prefix must be exactly 1 character.\n\nExamples: . ! / # $ @"
PREFIX_NOT_ALNUM      = "❌ Prefix cannot be a letter, number or space.\n\nValid examples: . ! / # $ @ *"
PREFIX_UPDATED        = "✅ Prefix updated.\nOld: *{old}*\nNew: *{new}*\n\nExample: {new}menu"

# --- menu ---
MENU_HEADER           = "*Command Menu*"
MENU_EMPTY            = "No commands are available to you."

# --- subscription ---
SUB_NONE              = "❌ No subscription found.\n\nYou are on the free tier."
SUB_STATUS            = "💳 *Subscription*\nPlan: {plan}\nStatus: {status}\nExpires: {expires}"
