import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

def bar_plot(labels, values, title, xlabel, ylabel, path):
    fig = plt.figure(figsize=(8, max(2.0, 0.35 * len(labels))))
    plt.barh(labels, values)
    plt.xlim(0, 100)
    plt.title(title)
    plt.xlabel(xlabel)
    plt.ylabel(ylabel)
    fig.savefig(path, dpi=120, bbox_inches="tight")
    plt.close(fig)

def coverage_plot(cov, path, metric: str = "lines"):
    files = cov.files()
    values = [getattr(cov.file_coverage_for(p).summary(), metric).pct for p in files]
    bar_plot(files, values, f"Coverage by file ({metric})", "%", "File", path)
