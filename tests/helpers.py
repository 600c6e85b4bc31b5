"""Helpers shared by the hclust test modules."""

from hclust.distance_map import DistanceMapClusterSet


def scratch_score(cluster_set, linkage, i, j):
    """Score a pair from current membership, without any cache."""
    linkage.reset()
    for item1 in cluster_set.each_item(i):
        for item2 in cluster_set.each_item(j):
            linkage.put(item1, item2, cluster_set.distance(i, j, item1, item2))
    return linkage.get()


def partition(cluster_set):
    """Cluster membership as a set of frozensets, ignoring indices."""
    return {
        frozenset(cluster_set.each_item(c)) for c in cluster_set.each_cluster(-1)
    }


def matrix_to_map(matrix):
    """Upper-triangle distance map with integer items."""
    n = len(matrix)
    return {
        a: {b: float(matrix[a, b]) for b in range(a + 1, n)} for a in range(n)
    }


class KeepSecondClusterSet(DistanceMapClusterSet):
    """Merges into the higher index and refills the lower slot from the end."""

    def merge(self, cluster1, cluster2):
        i, j = sorted((cluster1, cluster2))
        last = len(self.clusters) - 1
        if j == last:
            self.clusters[i].extend(self.clusters[j])
            del self.clusters[j]
            return i, last

        self.clusters[j].extend(self.clusters[i])
        self.clusters[i] = self.clusters[last]
        del self.clusters[last]
        return j, last
