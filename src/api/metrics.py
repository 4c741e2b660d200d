from prometheus_client import Counter, Histogram, REGISTRY


# we check if they are already registered to avoid errors during hot reloads or test runs
def get_or_create_metric(name, documentation, metric_type, **kwargs):
    try:
        return metric_type(name, documentation, **kwargs)
    except ValueError:
        return REGISTRY._names_to_collectors[name]


RUNS_TOTAL = get_or_create_metric(
    "planner_runs_total",
    "Prioritization runs by outcome",
    Counter,
    labelnames=["status"],
)

COMPLETION_LATENCY_SECONDS = get_or_create_metric(
    "planner_completion_latency_seconds",
    "Latency of the prioritization completion request",
    Histogram,
)

TASKS_FETCHED_TOTAL = get_or_create_metric(
    "planner_tasks_fetched_total", "Total open tasks read from Notion", Counter
)

TASKS_SCHEDULED_TOTAL = get_or_create_metric(
    "planner_tasks_scheduled_total", "Total tasks emitted with an estimate", Counter
)
