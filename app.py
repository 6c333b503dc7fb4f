# app.py
import logging

from flask import Flask, jsonify, request

import queries
from config import AppConfig, DatasetConfig
from data_service import DataService
from dataset import export_snapshot
from errors import DataLoadError, InvalidConfigurationError

app = Flask(__name__)

# --- CONFIG ---
config = AppConfig.from_env()

# --- 전역 상태 (단일 프로세스 대시보드용) ---
data_service = DataService(config)


# --- 에러 핸들러 ---
@app.errorhandler(InvalidConfigurationError)
def handle_invalid_configuration(e):
    return jsonify({"status": "error", "message": str(e)}), 400


@app.errorhandler(DataLoadError)
def handle_data_load_error(e):
    return jsonify({"status": "error", "message": e.message}), 500


def _int_arg(name, default):
    raw = request.args.get(name)
    if raw is None or raw == '':
        return default
    try:
        return int(raw)
    except ValueError:
        raise InvalidConfigurationError(f"'{name}' 파라미터는 정수여야 합니다: {raw!r}") from None


def _page_response(items):
    page = queries.paginate(
        items,
        page=_int_arg('page', 1),
        per_page=_int_arg('per_page', queries.DEFAULT_PER_PAGE),
    )
    page['items'] = [item.to_dict() for item in page['items']]
    return jsonify(page)


# --- 라우트 ---
@app.route('/health')
def health():
    return jsonify({"status": "ok", **data_service.status()})


@app.route('/api/dataset')
def get_dataset():
    return jsonify(data_service.get_snapshot().to_dict())


@app.route('/api/metrics')
def get_metrics():
    return jsonify(data_service.get_snapshot().metrics.to_dict())


@app.route('/api/revenue')
def get_revenue():
    return jsonify([r.to_dict() for r in data_service.get_snapshot().revenue_series])


@app.route('/api/category-sales')
def get_category_sales():
    return jsonify([c.to_dict() for c in data_service.get_snapshot().category_sales])


@app.route('/api/customer-growth')
def get_customer_growth():
    return jsonify([g.to_dict() for g in data_service.get_snapshot().customer_growth])


@app.route('/api/orders')
def list_orders():
    orders = queries.filter_orders(
        data_service.get_snapshot().orders,
        search=request.args.get('search', ''),
        status=request.args.get('status', ''),
    )
    return _page_response(orders)


@app.route('/api/orders/<order_id>')
def get_order(order_id):
    order = queries.find_order(data_service.get_snapshot().orders, order_id)
    if order is None:
        return jsonify({"status": "error", "message": f"주문을 찾을 수 없습니다: {order_id}"}), 404
    return jsonify(order.to_dict())


@app.route('/api/products')
def list_products():
    products = queries.filter_products(
        data_service.get_snapshot().products,
        search=request.args.get('search', ''),
        category=request.args.get('category', ''),
        stock_status=request.args.get('stock_status', ''),
    )
    return _page_response(products)


@app.route('/api/customers')
def list_customers():
    customers = queries.filter_customers(
        data_service.get_snapshot().customers,
        search=request.args.get('search', ''),
    )
    return _page_response(customers)


@app.route('/api/refresh', methods=['POST'])
def refresh():
    body = request.get_json(silent=True) or {}
    if not isinstance(body, dict):
        raise InvalidConfigurationError("요청 본문은 JSON 객체여야 합니다.")
    dataset_config = DatasetConfig.from_mapping(body, base=data_service.config.dataset)
    snapshot = data_service.refresh(dataset_config)
    return jsonify({
        "status": "ok",
        "counts": snapshot.counts(),
        "metrics": snapshot.metrics.to_dict(),
        "generated_at": snapshot.generated_at.isoformat(),
    })


@app.route('/api/export', methods=['POST'])
def export():
    paths = export_snapshot(data_service.get_snapshot(), data_service.config.output_dir)
    return jsonify({"status": "ok", "files": paths})


if __name__ == '__main__':
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    app.run(debug=True)
