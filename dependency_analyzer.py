# dependency_analyzer.py
from collections import defaultdict


def _primary_key_candidates(table_name):
    return {f"{table_name}_id", f"{table_name.rstrip('s')}_id"}


def _resolve_table(prefix, table_names):
    if f"{prefix}s" in table_names:
        return f"{prefix}s"
    if prefix in table_names:
        return prefix
    return None


def analyze_dependencies(model):
    """
    테이블 정의를 분석하여 테이블 간의 의존성 그래프를 생성합니다.
    'xxx_id' 형식의 컬럼명을 외래 키로 간주합니다. 단, 자기 자신의 기본 키
    (products.product_id) 는 제외합니다.

    Args:
        model (dict): 테이블 이름 -> {'columns': [...], ...} 매핑 (models.DATA_MODEL 형식)

    Returns:
        dict: 테이블 -> 의존하는(먼저 생성되어야 하는) 테이블 리스트
        dict: 테이블 -> 해당 테이블을 참조하는 테이블 리스트
    """
    dependencies = defaultdict(list)
    reverse_dependencies = defaultdict(list)
    table_names = list(model)

    for source_table, details in model.items():
        for col_name in details.get('columns', []):
            if not col_name.endswith('_id') or col_name in _primary_key_candidates(source_table):
                continue

            target_table = _resolve_table(col_name[:-len('_id')], table_names)
            if target_table and target_table != source_table:
                if target_table not in dependencies[source_table]:
                    dependencies[source_table].append(target_table)
                if source_table not in reverse_dependencies[target_table]:
                    reverse_dependencies[target_table].append(source_table)

    return dict(dependencies), dict(reverse_dependencies)


def get_generation_order(model):
    """
    의존성 그래프를 위상 정렬하여 데이터를 생성해야 할 테이블 순서를 반환합니다.
    진입 차수가 같은 테이블끼리는 모델에 선언된 순서를 따릅니다.

    Returns:
        list: 생성 순서대로 정렬된 테이블 이름 리스트
        None: 순환 참조가 있어 정렬할 수 없는 경우
    """
    dependencies, reverse_dependencies = analyze_dependencies(model)
    all_tables = list(model)

    in_degree = {table: len(dependencies.get(table, [])) for table in all_tables}
    queue = [table for table in all_tables if in_degree[table] == 0]
    sorted_order = []

    while queue:
        current_table = queue.pop(0)
        sorted_order.append(current_table)

        for dependent in reverse_dependencies.get(current_table, []):
            in_degree[dependent] -= 1
            if in_degree[dependent] == 0:
                queue.append(dependent)

    if len(sorted_order) == len(all_tables):
        return sorted_order
    return None
