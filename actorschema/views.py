from django.http import JsonResponse


def healthcheck(request):
    """
    Simple healthcheck endpoint.

    Returns 200 OK with status info.
    Used to verify the Django app is running correctly.
    """
    return JsonResponse({
        "status": "ok",
        "service": "actorschema-backend",
    })
