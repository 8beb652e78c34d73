from typing import Iterable
from prometheus_client.core import GaugeMetricFamily
from prometheus_client.registry import Collector, CollectorRegistry
from .druid_client import DruidClient

METRIC_NAME = "dte_druid_tasks_total"
METRIC_HELP = "Total number of Druid tasks per type and status."
LABELS = ["type", "status"]


class DruidTasksCollector(Collector):
    def __init__(self, client: DruidClient):
        self.client = client

    def describe(self) -> Iterable[GaugeMetricFamily]:
        # Lets the registry learn the metric name without querying Druid
        return [GaugeMetricFamily(METRIC_NAME, METRIC_HELP, labels=LABELS)]

    def collect(self) -> Iterable[GaugeMetricFamily]:
        tasks = GaugeMetricFamily(METRIC_NAME, METRIC_HELP, labels=LABELS)
        for task in self.client.fetch_task_counts():
            tasks.add_metric([task.type, task.status], task.total)
        yield tasks


def build_registry(client: DruidClient) -> CollectorRegistry:
    registry = CollectorRegistry(auto_describe=False)
    registry.register(DruidTasksCollector(client))
    return registry
