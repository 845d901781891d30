from eval.scenarios.refund import run_refund
from eval.scenarios.swap import run_swap
from tokenswap.ledger.ledger import Ledger
from tokenswap.tokenswap_logging import getLogger
from tokenswap.utils.data_logging import data_context, time_measure, write_data

if __name__ == "__main__":
    log = getLogger(__name__)
    log.info("starting evaluation...")

    try:
        ledger = Ledger()

        log.info("running scenarios...")
        with data_context("swap"):
            with time_measure("scenario"):
                res = run_swap(ledger)
            write_data(res)
            log.info("swap: %s", res)

        with data_context("refund"):
            with time_measure("scenario"):
                res = run_refund(ledger)
            write_data(res)
            log.info("refund: %s", res)

        log.info("ledger accepted %d instructions", len(ledger.accepted_instructions))

    except BaseException as e:
        log.error("experiments aborted with error: %s", str(e), exc_info=1)
        exit(1)

    log.info("finished evaluation...")
