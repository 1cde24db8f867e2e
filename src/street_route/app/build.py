# street_route/app/build.py
from collections.abc import Mapping
from dataclasses import dataclass

from street_route.config.models import RoutingModel
from street_route.domain.geocoder import Geocoder
from street_route.domain.street_graph import StreetMapGraph
from street_route.io.recorder import JsonlSink, Recorder, Sink
from street_route.io.search_logging import SearchLogging  # JSON logs
from street_route.runtime.registries import make_search_graph, resolve_graph
from street_route.runtime.rng import RNGRegistry
from street_route.search.hooks import NoopHooks, SearchHooks
from street_route.services.router import NetworkRoutePlanner


@dataclass
class App:
    graph: StreetMapGraph
    geocoder: Geocoder
    router: NetworkRoutePlanner
    rng: RNGRegistry
    hooks: SearchHooks


def build(
    cfg: RoutingModel | Mapping,
    *,
    use_logging: bool = True,
    sinks: list[Sink] | None = None,
    graph: StreetMapGraph | None = None,
) -> App:
    # 0) Validate config
    model = cfg if isinstance(cfg, RoutingModel) else RoutingModel.model_validate(cfg)

    # 1) RNG & graph
    seed = getattr(model.graph, "seed", 0)
    rng_registry = RNGRegistry(seed, scenario=model.name)
    if graph is None:
        graph = resolve_graph(model.graph, deps={"rng": rng_registry})

    # 2) Hooks (JSON logs + analytics)
    recorder = Recorder(*(sinks if sinks is not None else [JsonlSink()]))
    hooks = (
        SearchLogging(
            run_id=model.run_id,
            recorder=recorder,
            level=model.log.level,
            debug=model.log.debug,
        )
        if use_logging
        else NoopHooks()
    )

    # 3) Indexes & router
    geocoder = Geocoder(graph)
    router = NetworkRoutePlanner(
        graph,
        geocoder,
        search_graph=make_search_graph(model.search.heuristic, graph),
        timeout_s=model.search.timeout_s,
        hooks=hooks,
        run_id=model.run_id,
    )

    return App(graph, geocoder, router, rng_registry, hooks)
