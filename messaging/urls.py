# messaging/urls.py
from rest_framework.routers import SimpleRouter

from messaging.views import ChatViewSet

router = SimpleRouter()
router.register(r"", ChatViewSet, basename="chat")

urlpatterns = router.urls
