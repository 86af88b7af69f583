"""FormosaBBS article index records."""