from django.urls import path
from rest_framework.routers import SimpleRouter

from .views import CardSetViewSet, CardViewSet, initialize_catalog

router = SimpleRouter(trailing_slash=False)
router.register("sets", CardSetViewSet, basename="card-set")
router.register("cards", CardViewSet, basename="card")

urlpatterns = [
    path("initialize", initialize_catalog, name="catalog-initialize"),
] + router.urls
