# forum/urls.py
from rest_framework.routers import SimpleRouter

from forum.views import ForumPostViewSet

router = SimpleRouter()
router.register(r"", ForumPostViewSet, basename="forum")

urlpatterns = router.urls
