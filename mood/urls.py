# mood/urls.py
from rest_framework.routers import SimpleRouter

from mood.views import MoodEntryViewSet

router = SimpleRouter()
router.register(r"", MoodEntryViewSet, basename="mood")

urlpatterns = router.urls
