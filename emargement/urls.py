from django.urls import path
from . import views

app_name = "emargement"

urlpatterns = [
    # Petite sonde de santé (pratique pour Nginx / monitoring)
    path("sante", views.sante, name="sante"),

    # État et commandes (le front détient l'état, le serveur le fait évoluer)
    path("etat", views.etat_initial, name="etat_initial"),
    path("commande", views.commande, name="commande"),

    # Aperçus écran
    path("apercu/livret", views.apercu_livret, name="apercu_livret"),
    path("apercu/sieges", views.apercu_sieges, name="apercu_sieges"),

    # Sauvegardes
    path("sauvegarde/export", views.export_sauvegarde, name="export_sauvegarde"),
    path("sauvegarde/import", views.import_sauvegarde, name="import_sauvegarde"),
    path("disposition/export", views.export_disposition, name="export_disposition"),
    path("disposition/import", views.import_disposition, name="import_disposition"),

    # Export document (Celery)
    path("export/start", views.export_start, name="export_start"),
    path("export/status/<str:task_id>", views.export_status, name="export_status"),
    path("download/<str:token>/<str:fmt>", views.download_artifact, name="download_artifact"),
]
