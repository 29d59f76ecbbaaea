# frontend/views.py
from django.views.generic import TemplateView


class PageView(TemplateView):
    """Static client page; every data call is made by the browser against ``/api``."""

    page = None

    def get_template_names(self):
        return [f"frontend/{self.page}.html"]

    def get_context_data(self, **kwargs):
        context = super().get_context_data(**kwargs)
        context["page"] = self.page
        return context
