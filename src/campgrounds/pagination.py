from rest_framework.pagination import PageNumberPagination
from rest_framework.response import Response


class CampgroundPagination(PageNumberPagination):
    """Page-number pagination rendered into the {success, count, pagination, data} envelope."""
    page_size = 25                    # default items per page
    page_size_query_param = 'limit'   # allow ?limit=
    max_page_size = 100               # safety cap

    def get_paginated_response(self, data):
        pagination = {}
        limit = self.get_page_size(self.request)
        if self.page.has_next():
            pagination['next'] = {'page': self.page.next_page_number(), 'limit': limit}
        if self.page.has_previous():
            pagination['prev'] = {'page': self.page.previous_page_number(), 'limit': limit}
        return Response({
            'success': True,
            'count': self.page.paginator.count,
            'pagination': pagination,
            'data': data,
        })
