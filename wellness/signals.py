# wellness/signals.py
from django.dispatch import Signal

# Sent after a submission has been stored.
# kwargs: player, entry, fields (names of the metrics the submission carried)
entry_saved = Signal()
