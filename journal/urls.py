# journal/urls.py
from rest_framework.routers import SimpleRouter

from journal.views import JournalEntryViewSet

router = SimpleRouter()
router.register(r"", JournalEntryViewSet, basename="journal")

urlpatterns = router.urls
