import matplotlib.pyplot as plt


def plot_voronoi(diagram, ax=None, *, show_sites: bool = True, edge_color: str = "g", site_color: str = "r"):
    if ax is None:
        fig, ax = plt.subplots()

    W, H = diagram.region.width, diagram.region.height
    ax.plot([0, W, W, 0, 0], [0, 0, H, H, 0], "-k", linewidth=2)

    for p in diagram.polygons():
        if len(p) == 0:
            continue
        ax.fill(*p.T, fill=False, edgecolor=edge_color, linewidth=1)

    if show_sites and len(diagram.sites):
        ax.plot(*diagram.sites.T, ".", color=site_color, markersize=3)

    ax.set_aspect("equal")
    ax.set_title(f"Voronoi ({diagram.cell_count()} cells)")
    return ax
