from django.dispatch import Signal

# Sent after a refresh has committed, from a background thread.
# kwargs: total_countries, refreshed_at
# No receiver ships with this project: nothing here writes SUMMARY_IMAGE_PATH,
# so GET /countries/image stays 404 until an external receiver renders it.
refresh_completed = Signal()
