from pathlib import Path
from time import perf_counter

from id3py import accuracy, cross_validate, enable_logging, load_arff, train
from id3py.export import export_graphviz, export_rules, print_tree

data = load_arff(Path(__file__).with_name("weather.arff"))

t0 = perf_counter(); tree = train(data.records, data.catalog); print(f"train: {perf_counter()-t0:.4f} s")
print_tree(tree, data.catalog)
print(f"training accuracy: {accuracy(tree, data.records)}")
for rule in export_rules(tree, data.catalog):
    print(rule)

with enable_logging(level="INFO"):
    mean_acc, mean_nodes, mean_depth = cross_validate(data.shuffled(seed=42).records, data.catalog, 7, prune=True)
print(f"7-fold: accuracy={mean_acc:.3f} live nodes={mean_nodes:.1f} depth={mean_depth:.1f}")

try:
    export_graphviz(tree, data.catalog, "weather_tree", format="dot")
except RuntimeError as e:
    print(f"Skipping Graphviz export: {e}")
