# waktusolat/metrics.py

from prometheus_client import Counter, Histogram

# Define Prometheus metrics

# Cache Metrics
CACHE_HITS = Counter('waktusolat_cache_hits_total', 'Total month schedule cache hits', ['zone'])
CACHE_MISSES = Counter('waktusolat_cache_misses_total', 'Total month schedule cache misses', ['zone'])

# Resolution Metrics
SCHEDULE_LOOKUPS_TOTAL = Counter('waktusolat_schedule_lookups_total', 'Total month schedule lookups', ['status'])
ZONE_LOOKUPS_TOTAL = Counter('waktusolat_zone_lookups_total', 'Total GPS zone lookups', ['status'])

# Upstream API Metrics
UPSTREAM_REQUESTS_TOTAL = Counter('waktusolat_upstream_requests_total', 'Total upstream API requests', ['adapter_name', 'status'])
UPSTREAM_REQUEST_DURATION_SECONDS = Histogram('waktusolat_upstream_request_duration_seconds', 'Upstream API request duration in seconds', ['adapter_name'])

# Background Task Metrics
BACKGROUND_TASK_RUNS_TOTAL = Counter('waktusolat_background_task_runs_total', 'Total background task runs', ['task_name', 'status'])
BACKGROUND_TASK_DURATION_SECONDS = Histogram('waktusolat_background_task_duration_seconds', 'Background task duration in seconds', ['task_name'])
