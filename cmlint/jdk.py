"""
Catalog of well-known library types.

Front ends usually describe only the project's own types and refer to the
standard library by name. This table gives those names their hierarchy so
family checks (collection, stream, executor) work without the front end
shipping the whole JDK.
"""
from .typesys import TypeTable

# (name, supertypes...) in dependency order
_HIERARCHY = [
    ("java.lang.Object",),
    ("java.lang.AutoCloseable",),
    ("java.lang.Runnable",),
    ("java.lang.String", "java.lang.Object"),
    ("java.lang.Integer", "java.lang.Object"),
    ("java.lang.Thread", "java.lang.Object", "java.lang.Runnable"),
    ("java.awt.EventQueue", "java.lang.Object"),

    # Collections
    ("java.lang.Iterable", "java.lang.Object"),
    ("java.util.Collection", "java.lang.Iterable"),
    ("java.util.List", "java.util.Collection"),
    ("java.util.Set", "java.util.Collection"),
    ("java.util.SortedSet", "java.util.Set"),
    ("java.util.NavigableSet", "java.util.SortedSet"),
    ("java.util.Queue", "java.util.Collection"),
    ("java.util.Deque", "java.util.Queue"),
    ("java.util.AbstractCollection", "java.lang.Object", "java.util.Collection"),
    ("java.util.AbstractList", "java.util.AbstractCollection", "java.util.List"),
    ("java.util.AbstractSequentialList", "java.util.AbstractList"),
    ("java.util.AbstractSet", "java.util.AbstractCollection", "java.util.Set"),
    ("java.util.AbstractQueue", "java.util.AbstractCollection", "java.util.Queue"),
    ("java.util.ArrayList", "java.util.AbstractList", "java.util.List"),
    ("java.util.LinkedList", "java.util.AbstractSequentialList", "java.util.List", "java.util.Deque"),
    ("java.util.Vector", "java.util.AbstractList", "java.util.List"),
    ("java.util.HashSet", "java.util.AbstractSet", "java.util.Set"),
    ("java.util.LinkedHashSet", "java.util.HashSet", "java.util.Set"),
    ("java.util.TreeSet", "java.util.AbstractSet", "java.util.NavigableSet"),
    ("java.util.ArrayDeque", "java.util.AbstractCollection", "java.util.Deque"),
    ("java.util.PriorityQueue", "java.util.AbstractQueue"),
    ("java.util.Map", "java.lang.Object"),
    ("java.util.AbstractMap", "java.lang.Object", "java.util.Map"),
    ("java.util.HashMap", "java.util.AbstractMap", "java.util.Map"),
    ("java.util.TreeMap", "java.util.AbstractMap", "java.util.Map"),

    # Concurrent collections
    ("java.util.concurrent.BlockingQueue", "java.util.Queue"),
    ("java.util.concurrent.BlockingDeque", "java.util.concurrent.BlockingQueue", "java.util.Deque"),
    ("java.util.concurrent.ConcurrentMap", "java.util.Map"),
    ("java.util.concurrent.CopyOnWriteArrayList", "java.lang.Object", "java.util.List"),
    ("java.util.concurrent.CopyOnWriteArraySet", "java.util.AbstractSet"),
    ("java.util.concurrent.ConcurrentLinkedQueue", "java.util.AbstractQueue", "java.util.Queue"),
    ("java.util.concurrent.ConcurrentLinkedDeque", "java.util.AbstractCollection", "java.util.Deque"),
    ("java.util.concurrent.ConcurrentSkipListSet", "java.util.AbstractSet", "java.util.NavigableSet"),
    ("java.util.concurrent.LinkedBlockingQueue", "java.util.AbstractQueue", "java.util.concurrent.BlockingQueue"),
    ("java.util.concurrent.ArrayBlockingQueue", "java.util.AbstractQueue", "java.util.concurrent.BlockingQueue"),
    ("java.util.concurrent.LinkedBlockingDeque", "java.util.AbstractQueue", "java.util.concurrent.BlockingDeque"),
    ("java.util.concurrent.ConcurrentHashMap", "java.util.AbstractMap", "java.util.concurrent.ConcurrentMap"),
    ("java.util.concurrent.ConcurrentHashMap.KeySetView", "java.lang.Object", "java.util.Set"),

    # Streams
    ("java.util.stream.BaseStream", "java.lang.AutoCloseable"),
    ("java.util.stream.Stream", "java.util.stream.BaseStream"),
    ("java.util.stream.IntStream", "java.util.stream.BaseStream"),
    ("java.util.stream.LongStream", "java.util.stream.BaseStream"),
    ("java.util.stream.DoubleStream", "java.util.stream.BaseStream"),

    # Executors
    ("java.util.concurrent.Callable",),
    ("java.util.concurrent.Future",),
    ("java.util.concurrent.Executor",),
    ("java.util.concurrent.Executors", "java.lang.Object"),
    ("java.util.concurrent.ExecutorService", "java.util.concurrent.Executor"),
    ("java.util.concurrent.ScheduledExecutorService", "java.util.concurrent.ExecutorService"),
    ("java.util.concurrent.AbstractExecutorService", "java.lang.Object", "java.util.concurrent.ExecutorService"),
    ("java.util.concurrent.ThreadPoolExecutor", "java.util.concurrent.AbstractExecutorService"),
    ("java.util.concurrent.ForkJoinPool", "java.util.concurrent.AbstractExecutorService"),
]


def jdk_types() -> TypeTable:
    """Fresh TypeTable pre-loaded with the catalog."""
    table = TypeTable()
    for name, *supertypes in _HIERARCHY:
        table.define(name, *supertypes)
    return table
