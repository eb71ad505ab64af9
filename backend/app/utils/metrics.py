"""
Prometheus metrics definitions for the upload relay.
All metrics are registered here and can be imported by other modules.
"""
from prometheus_client import Counter, Histogram

# HTTP request metrics
http_requests_total = Counter(
    'http_requests_total',
    'Total HTTP requests',
    ['method', 'path', 'status']
)

http_request_duration_seconds = Histogram(
    'http_request_duration_seconds',
    'HTTP request duration in seconds',
    ['method', 'path'],
    buckets=[0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0]
)

# Error metrics
errors_total = Counter(
    'errors_total',
    'Total errors',
    ['error_type']
)

# Upload metrics
uploads_total = Counter(
    'uploads_total',
    'Total upload attempts by outcome',
    ['status']  # success, client_error, backend_error
)

upload_size_bytes = Histogram(
    'upload_size_bytes',
    'Size of files written to storage',
    buckets=[1024, 10240, 102400, 1048576, 5242880, 10485760, 52428800, 104857600]
)

storage_write_duration_seconds = Histogram(
    'storage_write_duration_seconds',
    'Duration of put-object calls in seconds',
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0, 30.0]
)
