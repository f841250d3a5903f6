import logging
import sys

from bulkorder.events.Event_Bus import GLOBAL_EVENT_BUS, ORDER_SHEET_MISSING_UNIT, simple_print_listener
from bulkorder.infra.Order_Repository import build_record_store
from bulkorder.logic.pipeline import generate_order_sheet
from bulkorder.utilities.config import LOG_LEVEL, get_order_sheet_config
from bulkorder.utilities.exceptions import OrderSheetError

logger = logging.getLogger(__name__)


def main() -> int:
    GLOBAL_EVENT_BUS.subscribe(ORDER_SHEET_MISSING_UNIT, simple_print_listener)
    store = None
    try:
        # Plain message format so progress reads like console output
        logging.basicConfig(level=LOG_LEVEL, format="%(message)s", stream=sys.stdout)
        config = get_order_sheet_config()
        store = build_record_store()
        generate_order_sheet(store, config)
    except OrderSheetError as err:
        print("Error!", {"err": err.to_dict()})
        return 1
    except Exception as err:
        logger.exception("Order sheet run failed")
        print("Error!", {"err": repr(err)})
        return 1
    finally:
        GLOBAL_EVENT_BUS.unsubscribe(ORDER_SHEET_MISSING_UNIT, simple_print_listener)
        if store is not None:
            store.close()
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
