import numpy as np
from sklearn.model_selection import cross_val_score
from sklearn.pipeline import make_pipeline
from sklearn.preprocessing import OrdinalEncoder

from id3py import ID3Classifier

rng = np.random.default_rng(42)
n_samples = 600
colors = rng.choice(["red", "green", "blue"], size=n_samples)
sizes = rng.choice(["S", "M", "L", "XL"], size=n_samples)
ages = rng.integers(18, 70, size=n_samples)

# target depends on colour and age band, with 10% label noise
y = np.where((colors == "red") | (ages > 50), "buy", "skip")
flip = rng.random(n_samples) < 0.1
y[flip] = np.where(y[flip] == "buy", "skip", "buy")

X = np.column_stack([colors, sizes, ages // 10])

for prune in (False, True):
    model = make_pipeline(OrdinalEncoder(dtype=np.int64), ID3Classifier(prune=prune))
    scores = cross_val_score(model, X, y, cv=5)
    print(f"prune={prune}: accuracy {scores.mean():.3f} +/- {scores.std():.3f}")

clf = ID3Classifier(prune=True).fit(OrdinalEncoder(dtype=np.int64).fit_transform(X), y)
print("\n".join(clf.format_tree(max_levels=3)))
