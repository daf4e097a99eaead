from rest_framework.pagination import PageNumberPagination


class StandardPagination(PageNumberPagination):
    """Paginacion por defecto para listados"""
    page_size = 12
    page_size_query_param = 'page_size'
    max_page_size = 50


class AdminPagination(PageNumberPagination):
    """Paginacion para listados de administración"""
    page_size = 20
    page_size_query_param = 'page_size'
    max_page_size = 100


def paginated_response(request, queryset, serializer_class, key, paginator_class=StandardPagination, context=None):
    """
    Pagina un queryset y devuelve la respuesta con el formato de listados:
    {count, next, previous, results: {<key>: [...], total_count}}
    """
    paginator = paginator_class()
    page = paginator.paginate_queryset(queryset, request)
    serializer = serializer_class(page, many=True, context=context or {'request': request})
    return paginator.get_paginated_response({
        key: serializer.data,
        'total_count': paginator.page.paginator.count,
    })


def include_inactive(request):
    """?include_inactive=true pide también los registros dados de baja"""
    return request.query_params.get('include_inactive', '').lower() == 'true'
