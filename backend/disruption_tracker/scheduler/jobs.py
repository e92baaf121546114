from loguru import logger


async def refresh_feeds_job(orchestrator):
    """
    Job to refresh the social and news feeds

    Args:
        orchestrator: IngestionOrchestrator built at startup
    """
    logger.info("Starting scheduled feed refresh")
    try:
        results = await orchestrator.refresh()
        logger.info(
            f"Scheduled feed refresh finished: social={results.social} news={results.news} "
            f"errors={len(results.errors)} in {results.duration_ms}ms"
        )
    except Exception as e:
        logger.exception(f"Scheduled feed refresh failed: {e}")


async def refresh_funding_job(orchestrator):
    """Job to seed and refresh funding rounds"""
    logger.info("Starting scheduled funding refresh")
    try:
        seeded, result = await orchestrator.refresh_funding()
        logger.info(
            f"Scheduled funding refresh finished: seeded={seeded} fetched={result.fetched} "
            f"inserted={result.inserted} skipped={result.skipped}"
        )
    except Exception as e:
        logger.exception(f"Scheduled funding refresh failed: {e}")


async def sweep_expired_job(store, cache=None):
    """
    Job to delete expired feed items and trending companies

    Drops cached reads when anything was removed.
    """
    try:
        deleted = store.sweep_expired()
        if cache is not None and (deleted['items'] or deleted['companies']):
            cache.clear()
    except Exception as e:
        logger.error(f"Expiry sweep failed: {e}")
