"""Application-level constants."""

# Keys for serialization (backend document field names)
DIVISIONS_KEY = "divisions"
REVISION_KEY = "__v"

# Form text
FORM_TITLE = "Update User"
LOADING_TEXT = "Loading..."
SUBMIT_LABEL = "Update"

# Output filenames
PAYLOAD_FILENAME = "update_payload.json"
